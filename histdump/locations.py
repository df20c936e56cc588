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

import os
import pathlib

import histdump.exception


# Location structure -> interface
#
#     $HISTDUMP_DIR, default ~/.bash_history_tool/       base()
#         bash_history.md                                 report()
#         bash_history_tool.log                           log()
#         archive/                                        archive()
#             bash_history_v<version>_<timestamp>.md      archive_entry(version, timestamp)
#
#     $HISTFILE, default ~/.bash_history                  history_file()
#     $PYTHON_HISTORY, default ~/.python_history          python_history_file()
#
# base() and archive() create their directories on demand. Nothing is created by __init__.

class Locations(object):
    BASE_DIR_NAME = '.bash_history_tool'
    REPORT_FILE_NAME = 'bash_history.md'
    LOG_FILE_NAME = 'bash_history_tool.log'
    ARCHIVE_DIR_NAME = 'archive'
    BASH_HISTORY_FILE_NAME = '.bash_history'
    PYTHON_HISTORY_FILE_NAME = '.python_history'
    TIMESTAMP_FORMAT = '%Y%m%d_%H%M%S'

    def __init__(self, base=None, history_file=None):
        self.home = Locations.normalize_path(
            'home directory',
            os.environ.get('HOME', None),
            pathlib.Path.home())
        self.base_dir = Locations.normalize_path(
            'output directory (e.g. HISTDUMP_DIR)',
            base,
            os.environ.get('HISTDUMP_DIR', None),
            self.home / Locations.BASE_DIR_NAME)
        self.history_path = Locations.normalize_path(
            'history file (e.g. HISTFILE)',
            history_file,
            # An empty HISTFILE is treated as unset.
            os.environ.get('HISTFILE', None) or None,
            self.home / Locations.BASH_HISTORY_FILE_NAME)

    def __repr__(self):
        return f'Locations(base={self.base_dir}, history_file={self.history_path})'

    def base(self):
        return Locations.ensure_dir_exists(self.base_dir)

    def report(self):
        return self.base_dir / Locations.REPORT_FILE_NAME

    def log(self):
        return self.base() / Locations.LOG_FILE_NAME

    def archive(self):
        return Locations.ensure_dir_exists(self.base_dir / Locations.ARCHIVE_DIR_NAME)

    # collision is 0 for the first entry with a given timestamp, 1 for the next, etc.
    def archive_entry(self, version, timestamp, collision=0):
        suffix = '' if collision == 0 else f'_{collision}'
        return self.archive() / f'bash_history_v{version}_{timestamp.strftime(Locations.TIMESTAMP_FORMAT)}{suffix}.md'

    def history_file(self):
        return self.history_path

    def python_history_file(self):
        return Locations.normalize_path(
            'python history file (e.g. PYTHON_HISTORY)',
            os.environ.get('PYTHON_HISTORY', None) or None,
            self.home / Locations.PYTHON_HISTORY_FILE_NAME)

    @staticmethod
    def ensure_dir_exists(dir):
        if dir.exists():
            if not dir.is_dir():
                raise histdump.exception.KillShellException(f'Not a directory: {dir}')
        else:
            dir.mkdir(exist_ok=False, parents=True)
        return dir

    @staticmethod
    def normalize_path(description, provided, *defaults):
        path = provided
        d = 0
        while path is None and d < len(defaults):
            path = defaults[d]
            d += 1
        if path is None:
            raise histdump.exception.KillShellException(
                f'Unable to start because value of {description} cannot be determined.')
        try:
            if not isinstance(path, pathlib.Path):
                path = pathlib.Path(path)
            path = path.expanduser()
        except Exception as e:
            raise histdump.exception.KillShellException(
                f'Unable to start because value of {description} cannot be determined: {e}')
        return path
