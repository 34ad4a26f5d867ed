# src/lexcount/config.py

VERSION = "0.1.0"

# A run of two or more word characters
DEFAULT_PATTERN = r"\w{2,}"

DEFAULT_PATH = "."
