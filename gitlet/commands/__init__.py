# This file makes the 'commands' directory a Python package
# Each module exposes a programmatic API plus a `run(args)` entry point used by the CLI

from . import init
from . import add
from . import rm
from . import commit
from . import log
from . import find
from . import status
from . import config
from . import branch
from . import checkout
from . import reset
from . import merge
