"""FAERScope Core: pharmacovigilance signal detection statistics."""

import logging

__version__ = "0.1.0"

logging.getLogger("faerscope").addHandler(logging.NullHandler())
