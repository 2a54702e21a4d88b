# Importing the kernel modules registers them.
from . import escape_time
