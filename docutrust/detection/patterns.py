"""
Shared PII pattern source-of-truth for detection and redaction.

Detection and redaction must use the same regexes, otherwise a category can
be reported without being masked (or the other way round).
"""
import re

PATTERNS = {
    # 3 groups of 4 digits separated by whitespace
    "AADHAAR": re.compile(r"\b\d{4}\s\d{4}\s\d{4}\b"),
    # 5 letters, 4 digits, 1 letter
    "PAN": re.compile(r"[A-Z]{5}[0-9]{4}[A-Z]"),
    # 10 digits starting with 6-9
    "PHONE": re.compile(r"\b[6-9]\d{9}\b"),
    # Loose email-shaped token
    "EMAIL": re.compile(r"\S+@\S+\.\S+"),
}

# Constant placeholders, never derived from the matched value
MASKS = {
    "AADHAAR": "**** **** ****",
    "PAN": "XXXXX0000X",
    "PHONE": "**********",
    "EMAIL": "hidden@email.com",
}

PATTERN_ORDER = ["AADHAAR", "PAN", "PHONE", "EMAIL"]
