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

import importlib
import inspect

import histdump.core
import histdump.op


class OpModule(object):

    def __init__(self, command, module_name):
        self._command = command
        self._op_constructor = None
        self._summary = None
        op_module = importlib.import_module(f'histdump.op.{module_name}')
        # Locate items in module needed to create and describe the op.
        for k, v in op_module.__dict__.items():
            if k == 'SUMMARY':
                self._summary = v
            elif inspect.isclass(v) and histdump.core.Op in inspect.getmro(v):
                # The op class, e.g. Dump in histdump.op.dump
                if module_name == v.__name__.lower():
                    self._op_constructor = v
        assert self._op_constructor is not None, module_name
        assert self._summary is not None, module_name

    def __repr__(self):
        return f'OpModule({self._command})'

    def command(self):
        return self._command

    def create_op(self, env):
        return self._op_constructor(env)

    def summary(self):
        return self._summary


def import_op_modules():
    op_modules = {}
    for command, module_name in histdump.op.commands.items():
        op_modules[command] = OpModule(command, module_name)
    return op_modules
