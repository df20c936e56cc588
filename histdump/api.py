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

"""Dump, clear, and archive the history of the running Python session.

The histdump executable runs in its own process, so it cannot see the command buffer of the
session that started it. This module can: imported into an interactive Python session, it
operates on that session's readline buffer, e.g.

    >>> from histdump.api import *
    >>> dump()
    Bash history dumped to /home/jao/.bash_history_tool/bash_history.md
    True
    >>> archive()
    Bash history archived to /home/jao/.bash_history_tool/archive/bash_history_v0.1.0_20261019_094200.md
    True

The history file defaults to $PYTHON_HISTORY, or ~/.python_history, which is where the
Python REPL keeps its history. Each function returns True on success. On failure, the reason
is printed to stderr and False is returned, leaving the session running.
"""

import histdump.env as _env
import histdump.exception as _exception
import histdump.history as _history
import histdump.locations as _locations
import histdump.op.help as _help
import histdump.util as _util

__all__ = ['dump', 'clear', 'archive', 'selftest', 'usage']


def _environment(base, history_file, history):
    if history is None:
        if history_file is None:
            history_file = _locations.Locations(base=base).python_history_file()
        history = _history.ReadlineHistory(history_file)
    return _env.Environment.create(base=base, history_file=history.path, history=history)


def _run(command, base, history_file, history):
    try:
        env = _environment(base, history_file, history)
        op = env.op_modules[command].create_op(env)
        if op.logged():
            env.start_logging()
        op.run()
        return True
    except (_exception.KillCommandException, _exception.KillShellException) as e:
        _util.print_to_stderr(str(e))
        return False


def dump(base=None, history_file=None, history=None):
    return _run('local', base, history_file, history)


def clear(base=None, history_file=None, history=None):
    return _run('clear', base, history_file, history)


def archive(base=None, history_file=None, history=None):
    return _run('archive', base, history_file, history)


def selftest(base=None, history_file=None, history=None):
    return _run('test', base, history_file, history)


def usage(base=None):
    print(_help.usage(_env.Environment.create(base=base)))
