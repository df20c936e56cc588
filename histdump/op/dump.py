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

import histdump.core
import histdump.exception
import histdump.history
import histdump.report
import histdump.util

SUMMARY = "Dump current session's bash history to {report}"

DATE_FORMAT = '%a %b %d %H:%M:%S %Z %Y'

logger = logging.getLogger(__name__)


class Dump(histdump.core.Op):

    def run(self):
        env = self.env
        history = env.history
        history_file = env.locations.history_file()
        report_path = env.locations.report()
        self.log_environment()
        try:
            if not history_file.exists():
                logger.info(f'Creating empty history file: {history_file}')
                history_file.parent.mkdir(parents=True, exist_ok=True)
                history_file.touch()
            # Bring buffer and file into agreement before reading the buffer.
            history.append()
            history.write()
            history.reload()
        except OSError as e:
            logger.error(f'Unable to synchronize history with {history_file}: {e}')
            raise histdump.exception.HistoryFileException(history_file, e)
        entries = history.entries()
        if not entries:
            logger.warning(f'Warning: In-memory history empty, reading {history_file}')
            entries = histdump.history.read_history_file(history_file)
        logger.info(f'Pre-dump HISTORY_FILE lines: {histdump.history.line_count(history_file)}')
        logger.info(f'In-memory history lines: {len(entries)}')
        logger.info('Sample history: ' + ''.join(f'\n  {entry}' for entry in entries[:2]))
        report = histdump.report.Report(version=env.version,
                                        output_dir=env.locations.base(),
                                        report_path=report_path,
                                        description=env.description,
                                        date=env.now().strftime(DATE_FORMAT),
                                        user=env.user,
                                        entries=entries)
        try:
            report.write()
        except OSError as e:
            logger.error(f'Unable to write {report_path}: {e}')
            raise histdump.exception.KillCommandException(f'Unable to write {report_path}: {e}')
        logger.info(f'Dumped bash history to {report_path}')
        print(f'Bash history dumped to {report_path}', flush=True)
        return report

    def log_environment(self):
        def getenv(var):
            return os.environ.get(var, None) or 'unset'

        logger.info(f'HISTFILE: {getenv("HISTFILE")}')
        logger.info(f'HISTORY_FILE: {self.env.locations.history_file()}')
        logger.info(f'History source: {self.env.history}')
        try:
            logger.info(f'Current directory: {os.getcwd()}')
        except FileNotFoundError:
            logger.info('Current directory: deleted')
        logger.info(f'Shell: {getenv("SHELL")}')
        logger.info(f'Invoked by: {histdump.util.invoking_process()}')
        logger.info(f'HISTSIZE: {getenv("HISTSIZE")}')
        logger.info(f'PROMPT_COMMAND: {getenv("PROMPT_COMMAND")}')
