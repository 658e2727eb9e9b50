"""Constant tables shared by the TOON encoder and decoder."""

import re

COMMA = ","
TAB = "\t"
PIPE = "|"

# Delimiters allowed in inline arrays, tabular rows and field lists
DELIMITERS = frozenset({COMMA, TAB, PIPE})

# Named delimiters accepted on the command line and over remote calls
DELIMITER_NAMES = {
    "comma": COMMA,
    "tab": TAB,
    "pipe": PIPE,
}

QUOTE = '"'
BACKSLASH = "\\"

OPEN_BRACKET = "["
CLOSE_BRACKET = "]"
OPEN_BRACE = "{"
CLOSE_BRACE = "}"

LENGTH_MARKER = "#"
LIST_ITEM_MARKER = "-"
LIST_ITEM_PREFIX = "- "

NULL_LITERAL = "null"
TRUE_LITERAL = "true"
FALSE_LITERAL = "false"

# Reserved literals that can't be unquoted strings
RESERVED_LITERALS = frozenset({NULL_LITERAL, TRUE_LITERAL, FALSE_LITERAL})

# Structural characters that require quoting
STRUCTURAL_CHARS = frozenset(":[]{}")

# Control characters that must always be escaped
CONTROL_CHARS = frozenset("\n\r\t")

# TOON only allows these 5 escape sequences
ESCAPE_MAP = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

UNESCAPE_MAP = {
    "\\": "\\",
    '"': '"',
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

# Number grammar: optional sign, digits, optional fraction, optional exponent
NUMBER_PATTERN = re.compile(r"^-?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?$")

# Bracket segment of an array header: [N] or [#N], optionally preceded by a key
ARRAY_HEADER_PATTERN = re.compile(r"^(?P<key>.*?)\[(?P<marker>#?)(?P<count>\d+)\]$")

# Floats inside this magnitude range are written without an exponent
PLAIN_FLOAT_MIN = 1e-6
PLAIN_FLOAT_MAX = 1e21
