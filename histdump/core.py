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

logger = logging.getLogger(__name__)


# An operation selected by a command token. run() returns normally on success, and raises
# a KillCommandException describing the failure otherwise.
class Op(object):

    def __init__(self, env):
        self.env = env

    def __repr__(self):
        return f'{self.op_name()}()'

    def run(self):
        assert False

    # True for ops that lose history, and should be confirmed by an interactive user.
    def destructive(self):
        return False

    @classmethod
    def op_name(cls):
        return cls.__name__.lower()

    # Write message to the log and to stdout.
    def report(self, message):
        logger.info(message)
        print(message, flush=True)

    # False for ops that must not leave anything behind, not even a log record.
    def logged(self):
        return True
