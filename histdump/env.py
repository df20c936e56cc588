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

import datetime
import getpass
import os

import histdump.history
import histdump.locations
import histdump.opmodule
import histdump.util
import histdump.version

DESCRIPTION = 'A standalone tool to manage bash history'
UNKNOWN_USER = 'unknown'


# Everything the ops need to know about their surroundings. Created once, at startup, and
# passed to each op.
class Environment(object):

    def __init__(self, locations, history, user, clock):
        self.locations = locations
        self.history = history
        self.user = user
        self.clock = clock
        self.version = histdump.version.VERSION
        self.description = DESCRIPTION
        self.op_modules = histdump.opmodule.import_op_modules()
        self.logging_configured = False

    def __repr__(self):
        return f'Environment({self.locations}, {self.history}, user={self.user})'

    def now(self):
        return self.clock()

    # Logging starts when an op runs, so that usage errors don't create the output directory.
    def start_logging(self):
        if not self.logging_configured:
            histdump.util.configure_logging(self.locations.log())
            self.logging_configured = True

    # history: A History. If omitted, a BufferHistory is used: containing listing (the output
    # of bash's history builtin) if provided, or the contents of the history file otherwise.
    @staticmethod
    def create(base=None, history_file=None, history=None, listing=None, user=None, clock=None):
        locations = histdump.locations.Locations(base=base, history_file=history_file)
        if history is None:
            path = locations.history_file()
            history = (histdump.history.BufferHistory(path)
                       if listing is None else
                       histdump.history.BufferHistory.from_listing(path, listing))
        if user is None:
            user = os.environ.get('USER', None) or Environment.login_name()
        if clock is None:
            clock = Environment.local_time
        return Environment(locations, history, user, clock)

    # getpass.getuser fails if neither LOGNAME nor USER is set and the uid has no passwd entry,
    # as in some containers.
    @staticmethod
    def login_name():
        try:
            return getpass.getuser()
        except (KeyError, OSError):
            return UNKNOWN_USER

    @staticmethod
    def local_time():
        return datetime.datetime.now().astimezone()
