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

import histdump.history

PLACEHOLDER = 'No commands in current session'
VALUE_WIDTH = 60


class Report(object):

    def __init__(self, version, output_dir, report_path, description, date, user, entries):
        self.version = version
        self.output_dir = output_dir
        self.report_path = report_path
        self.description = description
        self.date = date
        self.user = user
        # Blank entries are dropped. Order is preserved, duplicates are kept.
        self.commands = [entry for entry in entries if entry.strip()]

    def __repr__(self):
        return f'Report({self.report_path}, {len(self.commands)} commands)'

    def session(self):
        return [('Version', self.version),
                ('Output_Dir', self.output_dir),
                ('Bash_Hist', self.report_path),
                ('Script_Desc', self.description),
                ('Date', self.date),
                ('User', self.user)]

    def render(self):
        lines = ['# Bash History Dump',
                 '',
                 '## Session',
                 '',
                 f'| {"Item":<17} | {"Value":<{VALUE_WIDTH}} |',
                 f'| {"-" * 17} | {"-" * VALUE_WIDTH} |']
        for item, value in self.session():
            label = f'**{item}:**'
            lines.append(f'| {label:<17} | {str(value):<{VALUE_WIDTH}} |')
        lines.extend(['',
                      '## History',
                      '',
                      '```bash'])
        if self.commands:
            lines.extend(f' - {command}' for command in self.commands)
        else:
            lines.append(f' - {PLACEHOLDER}')
        lines.append('```')
        return '\n'.join(lines) + '\n'

    def write(self):
        self.report_path.write_text(self.render(),
                                    encoding=histdump.history.ENCODING,
                                    errors=histdump.history.ERRORS)

