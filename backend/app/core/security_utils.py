"""
Input validation utilities for uploaded filenames and user-supplied text
"""

import logging
import os
import re

logger = logging.getLogger(__name__)


class InputValidator:
    """Input validation utilities"""

    # Safe filename pattern (alphanumeric, hyphens, underscores, dots)
    SAFE_FILENAME_PATTERN = re.compile(r'^[a-zA-Z0-9._-]+$')
    UNSAFE_FILENAME_CHARS = re.compile(r'[^a-zA-Z0-9._-]+')

    # URL validation pattern
    URL_PATTERN = re.compile(
        r'^https?://'  # http:// or https://
        r'(?:(?:[A-Z0-9](?:[A-Z0-9-]{0,61}[A-Z0-9])?\.)+[A-Z]{2,6}\.?|'  # domain...
        r'localhost|'  # localhost...
        r'\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3})'  # ...or ip
        r'(?::\d+)?'  # optional port
        r'(?:/?|[/?]\S+)$', re.IGNORECASE)

    @classmethod
    def validate_filename(cls, filename: str) -> bool:
        """Validate filename for safety"""
        if not filename or len(filename) > 255:
            return False

        return bool(cls.SAFE_FILENAME_PATTERN.match(filename))

    @classmethod
    def sanitize_filename(cls, filename: str, default: str = "upload.pdf") -> str:
        """Reduce a client-supplied filename to a safe storage key component"""
        name = os.path.basename((filename or "").replace("\\", "/")).strip()
        name = cls.UNSAFE_FILENAME_CHARS.sub("_", name).strip("._")
        if not name:
            return default

        # Keep the extension when trimming long names
        if len(name) > 255:
            stem, dot, ext = name.rpartition(".")
            if dot and len(ext) <= 10:
                name = f"{stem[:255 - len(ext) - 1]}.{ext}"
            else:
                name = name[:255]
        return name

    @classmethod
    def file_extension(cls, filename: str) -> str:
        """Lower-case extension without the dot, or an empty string"""
        _, dot, ext = (filename or "").rpartition(".")
        return ext.lower() if dot else ""

    @classmethod
    def validate_url(cls, url: str) -> bool:
        """Validate URL format"""
        if not url or len(url) > 2048:
            return False

        return bool(cls.URL_PATTERN.match(url))

    @classmethod
    def sanitize_string(cls, value: str, max_length: int = 1000) -> str:
        """Sanitize string input"""
        if not isinstance(value, str):
            value = str(value)

        # Remove null bytes and control characters
        value = ''.join(char for char in value if ord(char) >= 32 or char in '\n\r\t')

        # Limit length
        value = value[:max_length]

        return value.strip()
