# This file is part of Histdump.
#
# Histdump is free software: you can redistribute it and/or modify it
# under the terms of the GNU General Public License as published by the
# Free Software Foundation, either version 3 of the License, (or at your
# option) any later version.
#
# Histdump is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or
# FITNESS FOR A PARTICULAR PURPOSE.  See the GNU General Public License
# for more details.
#
# You should have received a copy of the GNU General Public License
# along with Histdump.  If not, see <https://www.gnu.org/licenses/>.

import logging
import os
import stat
import sys

import psutil

import histdump.history

LOG_FORMAT = '[%(asctime)s] %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


# Utility to print to stderr, flushing stdout first, to minimize weird ordering due to buffering.
def print_to_stderr(message):
    sys.stdout.flush()
    print(message, file=sys.stderr, flush=True)


# All histdump loggers are children of the histdump logger, which writes to the log file.
# Configuring again (e.g. for a different output directory) replaces the previous log file.
def configure_logging(log_path):
    logger = logging.getLogger('histdump')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    # Commands may carry bytes that aren't UTF-8.
    handler = logging.FileHandler(log_path, mode='a', encoding='utf-8', errors='backslashreplace')
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger


# Name of the process that started histdump, usually the interactive shell.
def invoking_process():
    try:
        return psutil.Process(os.getppid()).name()
    except psutil.Error as e:
        return f'unknown ({e})'


class InputSource(object):

    def __init__(self, stdin=None):
        if stdin is None:
            stdin = sys.stdin
        self._stdin = stdin
        self._piped = False
        self._interactive = False
        try:
            mode = os.fstat(stdin.fileno()).st_mode
            self._piped = stat.S_ISFIFO(mode)
            self._interactive = stdin.isatty()
        except (AttributeError, OSError, ValueError):
            # Not backed by a file descriptor, e.g. replaced by a StringIO.
            pass

    def __repr__(self):
        source = ('interactive' if self._interactive else
                  'piped' if self._piped else
                  'other')
        return f'InputSource({source})'

    def interactive(self):
        return self._interactive

    # A pipe on stdin carries the session's history, e.g. history | histdump local
    def piped(self):
        return self._piped

    def read(self):
        stdin = getattr(self._stdin, 'buffer', None)
        return (self._stdin.read() if stdin is None else
                stdin.read().decode(histdump.history.ENCODING, histdump.history.ERRORS))
