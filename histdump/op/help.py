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

import histdump.core
import histdump.locations

SUMMARY = 'Show this help message'


class Help(histdump.core.Op):

    def run(self):
        print(usage(self.env), flush=True)

    def logged(self):
        return False


def usage(env):
    commands = '|'.join(env.op_modules)
    locations = env.locations
    placeholders = {'report': locations.report(),
                    'archive': locations.base_dir / histdump.locations.Locations.ARCHIVE_DIR_NAME}
    width = max(len(command) for command in env.op_modules)
    lines = [f'Usage: histdump [-d|--dir DIR] [-f|--histfile FILE] [-y|--yes] {{{commands}}}',
             'Commands:']
    for command, op_module in env.op_modules.items():
        lines.append(f'  {command:<{width}} : {op_module.summary().format(**placeholders)}')
    lines.extend(['Options:',
                  '  -d, --dir DIR        : Output directory (default: $HISTDUMP_DIR, or ~/.bash_history_tool)',
                  '  -f, --histfile FILE  : History file (default: $HISTFILE, or ~/.bash_history)',
                  '  -y, --yes            : Clear without asking for confirmation',
                  "Note: A running shell's history is only visible to histdump if piped in,",
                  '      e.g. history | histdump local'])
    return '\n'.join(lines)
