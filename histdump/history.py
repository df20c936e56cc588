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

"""Access to the history mechanism of the session whose history is being dumped.

The ops need five things from the host: append new buffer entries to the history file,
write the whole buffer to the history file, reload the buffer from the history file,
clear the buffer, and list the buffer's entries in order. C{History} defines that
contract. There are two implementations:

    - C{ReadlineHistory}: The readline buffer of the running Python interpreter. This is
      process-global state, owned by the interactive session that imported histdump.
    - C{BufferHistory}: A buffer supplied explicitly, e.g. the output of bash's history builtin
      piped to histdump. If nothing is supplied, the buffer starts out with the contents
      of the history file, which is what bash does on startup.
"""

import importlib
import pathlib
import re

# bash's history builtin prints entries as "%5d%c %s": the ordinal, '*' for a modified entry or
# a space, then a space and the command.
ORDINAL = re.compile(r'^ *[0-9]+[ *] ')

# History files are rewritten byte for byte as read: bytes that aren't UTF-8 survive as lone
# surrogates, and only \n separates lines.
ENCODING = 'utf-8'
ERRORS = 'surrogateescape'

# With HISTTIMEFORMAT set, bash precedes each entry in the history file by #<seconds since epoch>.
TIMESTAMP = re.compile(r'^#[0-9]+$')


def strip_ordinal(entry):
    return ORDINAL.sub('', entry, count=1)


def read_history_file(path):
    return [command for _, command in read_history_entries(path)]


# Returns (timestamp, command) pairs. timestamp is the line preceding the command in the file,
# e.g. #1760866920, or None.
def read_history_entries(path):
    try:
        with open(path, mode='r', encoding=ENCODING, errors=ERRORS, newline='') as file:
            text = file.read()
    except FileNotFoundError:
        return []
    entries = []
    timestamp = None
    lines = text.split('\n')
    if lines[-1] == '':
        # Newline at end of file, or empty file
        lines.pop()
    for line in lines:
        if TIMESTAMP.match(line):
            timestamp = line
        else:
            entries.append((timestamp, line))
            timestamp = None
    return entries


# Same as wc -l
def line_count(path):
    try:
        with open(path, 'rb') as file:
            return sum(chunk.count(b'\n') for chunk in iter(lambda: file.read(65536), b''))
    except FileNotFoundError:
        return 0


class History(object):

    def __init__(self, path):
        self.path = pathlib.Path(path)

    def __repr__(self):
        return f'{type(self).__name__}({self.path})'

    def __len__(self):
        return len(self.entries())

    # history -a: Append entries added since the last sync to the history file.
    def append(self):
        assert False

    # history -w: Replace the contents of the history file by the buffer.
    def write(self):
        assert False

    # history -c; history -r: Replace the buffer by the contents of the history file.
    def reload(self):
        assert False

    # history -c
    def clear(self):
        assert False

    # The buffer's commands, oldest first, without the ordinals that the history builtin adds.
    def entries(self):
        assert False


class BufferHistory(History):

    # commands: The buffer's initial contents. If omitted, the buffer starts out with the
    # contents of the history file, read on first use.
    def __init__(self, path, commands=None):
        super().__init__(path)
        # (timestamp, command) pairs, see read_history_entries
        self._buffer = None if commands is None else [(None, command) for command in commands]
        self._synced = 0

    # listing is the output of bash's history builtin.
    @staticmethod
    def from_listing(path, listing):
        commands = [strip_ordinal(line) for line in listing.splitlines() if line.strip()]
        return BufferHistory(path, commands)

    def append(self):
        new = self.buffer()[self._synced:]
        if new:
            with self.open(mode='a') as file:
                BufferHistory.print_entries(new, file)
        self._synced = len(self._buffer)

    def write(self):
        buffer = self.buffer()
        with self.open(mode='w') as file:
            BufferHistory.print_entries(buffer, file)
        self._synced = len(buffer)

    def reload(self):
        self._buffer = read_history_entries(self.path)
        self._synced = len(self._buffer)

    def clear(self):
        self._buffer = []
        self._synced = 0

    def entries(self):
        return [command for _, command in self.buffer()]

    # BufferHistory

    def buffer(self):
        if self._buffer is None:
            self.reload()
        return self._buffer

    def add(self, command):
        self.buffer().append((None, command))

    def open(self, mode):
        return self.path.open(mode=mode, encoding=ENCODING, errors=ERRORS, newline='')

    @staticmethod
    def print_entries(entries, file):
        for timestamp, command in entries:
            if timestamp is not None:
                print(timestamp, file=file)
            print(command, file=file)


class ReadlineHistory(History):

    def __init__(self, path):
        super().__init__(path)
        # readline is not available on all platforms, and only this class needs it.
        self.readline = importlib.import_module('readline')
        # Entries present already were loaded from (or will be written to) the history file by
        # whoever set up the session, e.g. site.py for the Python REPL.
        self._synced = self.readline.get_current_history_length()

    def append(self):
        n_new = self.readline.get_current_history_length() - self._synced
        if n_new > 0:
            # append_history_file requires an existing file
            self.path.touch(exist_ok=True)
            self.readline.append_history_file(n_new, str(self.path))
        self._synced = self.readline.get_current_history_length()

    def write(self):
        self.readline.write_history_file(str(self.path))
        self._synced = self.readline.get_current_history_length()

    def reload(self):
        self.readline.clear_history()
        if self.path.exists():
            self.readline.read_history_file(str(self.path))
        self._synced = self.readline.get_current_history_length()

    def clear(self):
        self.readline.clear_history()
        self._synced = 0

    def entries(self):
        entries = []
        for i in range(1, self.readline.get_current_history_length() + 1):  # 1-based
            item = self.readline.get_history_item(i)
            if item is not None:
                entries.append(item)
        return entries
