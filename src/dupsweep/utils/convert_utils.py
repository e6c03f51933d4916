"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
Size conversions for the --max-size flag and summaries.
"""
import re

_SIZE_PATTERN = re.compile(r'^(\d+(?:\.\d+)?)\s*(?:([KMGTP])I?)?B?$')

_UNITS = {
    '': 1,
    'K': 1024, 'M': 1024 ** 2, 'G': 1024 ** 3, 'T': 1024 ** 4, 'P': 1024 ** 5,
}


class ConvertUtils:
    @staticmethod
    def bytes_to_human(size_bytes: int) -> str:
        """
        Convert bytes to human-readable string (e.g., 1.50KB, 3.20MB).
        """
        if size_bytes < 0:
            return "0B"

        for unit in ["B", "KB", "MB", "GB", "TB", "PB"]:
            if size_bytes < 1024:
                return f"{size_bytes:.2f}{unit}"
            size_bytes /= 1024
        return f"{size_bytes:.2f}EB"

    @staticmethod
    def human_to_bytes(size_str: str) -> int:
        """
        Convert a size string to bytes.
        Accepts plain byte counts ('104857600') and binary units ('100MB', '100M', '100MiB', '1.5G').
        Raises ValueError for negative sizes or invalid formats.
        """
        text = str(size_str).strip().upper()
        if text.startswith('-'):
            raise ValueError(f"Negative size not allowed: '{size_str}'")

        match = _SIZE_PATTERN.match(text)
        if not match:
            raise ValueError(
                f"Invalid size format: '{size_str}'. "
                f"Supported formats: 104857600, 100MB, 100M, 1.5GB"
            )

        value, prefix = match.groups()
        return int(float(value) * _UNITS[prefix or ''])

    @staticmethod
    def is_valid_size_format(size_str: str) -> bool:
        try:
            ConvertUtils.human_to_bytes(size_str)
            return True
        except ValueError:
            return False
