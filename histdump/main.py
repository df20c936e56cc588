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

import sys

import prompt_toolkit.shortcuts

import histdump.env
import histdump.exception
import histdump.op.help
import histdump.util
from histdump.cliargs import CommandLine, anon, boolean_flag, flag

COMMAND_LINE = CommandLine(base=flag('-d', '--dir'),
                           history_file=flag('-f', '--histfile'),
                           yes=boolean_flag('-y', '--yes'),
                           command=anon())


def confirm_interactively(env, command):
    return prompt_toolkit.shortcuts.confirm(
        f'{command} erases the history in memory and in {env.locations.history_file()}. Continue?')


def run_command(args, input_source, confirm):
    # Piped input is the session's history, as listed by bash's history builtin.
    listing = input_source.read() if input_source.piped() else None
    env = histdump.env.Environment.create(base=args['base'],
                                          history_file=args['history_file'],
                                          listing=listing)
    command = args['command']
    op_module = env.op_modules.get(command[0], None) if len(command) == 1 else None
    if op_module is None:
        histdump.op.help.Help(env).run()
        return 1
    op = op_module.create_op(env)
    if op.destructive() and not args['yes'] and input_source.interactive():
        try:
            confirmed = confirm(env, command[0])
        except (KeyboardInterrupt, EOFError):
            confirmed = False
        if not confirmed:
            print('Cancelled', flush=True)
            return 1
    if op.logged():
        env.start_logging()
    op.run()
    return 0


# argv excludes the program name. Returns the exit status.
def run(argv, input_source=None, confirm=confirm_interactively):
    if input_source is None:
        input_source = histdump.util.InputSource()
    try:
        try:
            args = COMMAND_LINE.parse(argv)
        except histdump.exception.KillShellException:
            histdump.op.help.Help(histdump.env.Environment.create()).run()
            raise
        return run_command(args, input_source, confirm)
    except (histdump.exception.KillCommandException,
            histdump.exception.KillShellException) as e:
        histdump.util.print_to_stderr(str(e))
        return 1


def main():
    sys.exit(run(sys.argv[1:]))


if __name__ == '__main__':
    main()
