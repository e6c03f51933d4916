from dupsweep.core.models import KeepStrategy
from dupsweep.core.hasher import HASH_ALIASES, available_algorithms

KEEP_ALIASES = {strategy.value: strategy for strategy in KeepStrategy}

KEEP_CHOICES = list(KEEP_ALIASES.keys())

KEEP_HELP_TEXT = (
    "Which file of each duplicate group to keep:\n"
    + "".join(f"  {s.value:<8}: {s.description}\n" for s in KeepStrategy)
    + "Default: first"
)

HASH_HELP_TEXT = (
    "Hash algorithm used to compare file contents:\n"
    f"  {', '.join(available_algorithms())}\n"
    f"  coreutils names are accepted too ({', '.join(HASH_ALIASES)})\n"
    "Default: xxh64 (fastest)"
)

EPILOG_TEXT = """
Exit status:
  0  no duplicates, or every action succeeded
  1  one or more files could not be removed
  2  usage or configuration error (nothing was scanned)

Examples:
  List duplicate groups in Downloads
  %(prog)s -d ~/Downloads -v

  Preview what would be removed, keeping the newest copy
  %(prog)s -d ~/Downloads --keep newest --dry-run

  Remove duplicates permanently, keeping the oldest copy, and save a log
  %(prog)s -d ~/Downloads --keep oldest --delete -v --log-file ~/dupsweep.log

  Move duplicates to the system trash, comparing with SHA-256
  %(prog)s -d ~/Downloads --delete --trash --hash sha256sum
"""
