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

import histdump.core
import histdump.exception
import histdump.history

SUMMARY = 'Clear in-memory and on-disk bash history'

logger = logging.getLogger(__name__)


class Clear(histdump.core.Op):

    def run(self):
        history = self.env.history
        history_file = self.env.locations.history_file()
        try:
            logger.info(f'Pre-clear HISTORY_FILE lines: {histdump.history.line_count(history_file)}')
            logger.info(f'Pre-clear in-memory history: {len(history)} lines')
            history.clear()
            if history_file.is_dir():
                raise IsADirectoryError(f'Is a directory: {history_file}')
            if history_file.exists():
                # Truncate. Not necessarily a regular file, e.g. HISTFILE=/dev/null.
                with history_file.open(mode='w'):
                    pass
                self.report(f'Bash history cleared (in-memory and {history_file})')
            else:
                self.report(f'History file not found: {history_file}')
                history_file.parent.mkdir(parents=True, exist_ok=True)
                history_file.touch()
            # Reloading from the now empty file keeps buffer and file in agreement.
            history.reload()
        except OSError as e:
            logger.error(f'Unable to clear {history_file}: {e}')
            raise histdump.exception.HistoryFileException(history_file, e)
        logger.info(f'Post-clear HISTORY_FILE lines: {histdump.history.line_count(history_file)}')
        logger.info(f'Post-clear in-memory history: {len(history)} lines')

    def destructive(self):
        return True
