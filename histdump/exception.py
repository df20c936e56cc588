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

# Exceptions extend BaseException, so that they cannot be caught by "except Exception".
# Anything raised while running an op, other than these, is a bug.


# Exception for terminating an operation. The message is intended for the user.
class KillCommandException(BaseException):

    def __init__(self, cause):
        super().__init__(cause)
        self.cause = cause

    def __str__(self):
        return str(self.cause)


# archive requested before any dump.
class MissingReportException(KillCommandException):

    def __init__(self, report):
        super().__init__(f'No bash history file to archive: {report}')
        self.report = report


class ArchiveException(KillCommandException):

    def __init__(self, report, error):
        super().__init__(f'Failed to archive bash history: {error}')
        self.report = report
        self.error = error


class HistoryFileException(KillCommandException):

    def __init__(self, history_file, error):
        super().__init__(f'History file is unusable: {history_file}: {error}')
        self.history_file = history_file
        self.error = error


# A stage of the self test failed. The stage is 'Dump' or 'Clear'.
class SelfTestException(KillCommandException):

    # cause: The exception raised by the stage, if any.
    def __init__(self, stage, cause=None):
        super().__init__(f'{stage} test: FAIL' if cause is None else f'{stage} test: FAIL: {cause}')
        self.stage = stage
        self.failure = cause


# Startup failure: bad command-line flags, unusable configuration.
class KillShellException(BaseException):

    def __init__(self, cause):
        super().__init__(cause)
