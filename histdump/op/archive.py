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

import errno
import logging
import os
import pathlib
import shutil
import tempfile

import histdump.core
import histdump.exception

SUMMARY = 'Archive {report} to {archive}'

# link fails with these on filesystems without hard links, e.g. vfat.
NO_HARD_LINKS = (errno.EPERM, errno.ENOTSUP, errno.EOPNOTSUPP)

logger = logging.getLogger(__name__)


# Archive entries are named by version and time, to the second. Archiving twice in the same
# second yields a second entry with a counter suffix: ..._20261019_094200_1.md. An existing
# entry is never replaced.
class Archive(histdump.core.Op):

    def run(self):
        locations = self.env.locations
        report = locations.report()
        if not report.is_file():
            logger.info(f'No bash history file to archive: {report}')
            raise histdump.exception.MissingReportException(report)
        timestamp = self.env.now()
        temp_path = None
        try:
            # Copy to a temporary file first, so that a failed copy leaves no partial entry.
            with tempfile.NamedTemporaryFile(dir=locations.archive(),
                                             prefix='.',
                                             suffix='.partial',
                                             delete=False) as temp:
                temp_path = pathlib.Path(temp.name)
                with report.open(mode='rb') as source:
                    shutil.copyfileobj(source, temp)
            shutil.copymode(report, temp_path)
            entry = self.link(temp_path, timestamp)
        except OSError as e:
            logger.error(f'Failed to archive {report}: {e}')
            raise histdump.exception.ArchiveException(report, e)
        finally:
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)
        self.report(f'Bash history archived to {entry}')
        return entry

    # Link the copy under the first unused entry name. link, unlike rename, fails if the
    # target exists.
    def link(self, temp_path, timestamp):
        collision = 0
        while True:
            entry = self.env.locations.archive_entry(self.env.version, timestamp, collision)
            try:
                try:
                    os.link(temp_path, entry)
                except OSError as e:
                    if e.errno not in NO_HARD_LINKS:
                        raise
                    logger.info(f'Unable to link {entry} ({e}), copying instead')
                    Archive.copy_exclusive(temp_path, entry)
                return entry
            except FileExistsError:
                collision += 1

    # Like link, fails if the target exists. A failed copy is removed.
    @staticmethod
    def copy_exclusive(source_path, entry):
        with open(entry, mode='xb') as target:
            try:
                with source_path.open(mode='rb') as source:
                    shutil.copyfileobj(source, target)
            except OSError:
                target.close()
                entry.unlink(missing_ok=True)
                raise
        shutil.copymode(source_path, entry)
