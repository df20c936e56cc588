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

from histdump.exception import KillShellException


class Arg(object):

    def __init__(self, default):
        self.var = None  # Filled in after construction
        self.default = default

    def register_flags(self, all_flags):
        assert False

    def has_flag(self, flag):
        assert False


class AnonArg(Arg):

    def __repr__(self):
        return 'AnonArg()'

    def register_flags(self, all_flags):
        pass

    def has_flag(self, flag):
        return False

    def is_anon(self):
        return True

    def is_boolean(self):
        return False


class FlagArg(Arg):

    def __init__(self, f1, f2, default):
        super().__init__(default)
        self.short = None
        self.long = None
        if f2 is None:
            if FlagArg.short(f1):
                self.short = f1
            else:
                self.long = f1
        elif FlagArg.short(f1) and FlagArg.long(f2):
            self.short = f1
            self.long = f2
        elif FlagArg.long(f1) and FlagArg.short(f2):
            self.long = f1
            self.short = f2
        else:
            raise KillShellException(
                f'If two flags are specified, one must be long and one must be short: {f1}, {f2}')

    def __repr__(self):
        return (f'{self.short}|{self.long}' if self.short and self.long else
                self.short if self.short else
                self.long)

    def register_flags(self, all_flags):
        for flag in (self.short, self.long):
            if flag is not None:
                if flag in all_flags:
                    raise KillShellException(f'Duplicated flag: {flag}')
                all_flags.add(flag)

    def has_flag(self, flag):
        return self.short == flag or self.long == flag

    def is_anon(self):
        return False

    def is_boolean(self):
        return False

    @staticmethod
    def short(f):
        FlagArg.check_valid_flag(f)
        return f[0] == '-' and f[1] != '-'

    @staticmethod
    def long(f):
        FlagArg.check_valid_flag(f)
        return f[0] == '-' and f[1] == '-'

    @staticmethod
    def check_valid_flag(f):
        if len(f) < 2 or not f.startswith('-') or len(f.lstrip('-')) == 0:
            raise KillShellException(f'Invalid flag: {f}')


class BooleanFlagArg(FlagArg):

    def __repr__(self):
        return f'BooleanFlag({super().__repr__()})'

    def is_boolean(self):
        return True


class CommandLine(object):

    def __init__(self, **var_arg):
        self.var_arg = var_arg
        anon_seen = False
        for var, arg in self.var_arg.items():
            if not isinstance(arg, Arg):
                raise KillShellException(f'Arg value must be flag(), boolean_flag(), or anon(): {arg}')
            if arg.is_anon():
                if anon_seen:
                    raise KillShellException('Too many anon() specified.')
                anon_seen = True
            arg.var = var
        all_flags = set()
        for arg in self.var_arg.values():
            arg.register_flags(all_flags)
        # If register_flags didn't raise an exception, there are no duplicates

    # argv excludes the program name. Returns a dict, var -> value. The anon arg, if any,
    # gets a list of all tokens that aren't flags or flag values.
    def parse(self, argv):
        def isflag(token):
            return token.startswith('-') and token != '-'

        def arg_of(flag):
            for arg in self.var_arg.values():
                if arg.has_flag(flag):
                    return arg
            raise KillShellException(f'Unrecognized flag: {flag}')

        def anon_arg():
            for arg in self.var_arg.values():
                if arg.is_anon():
                    return arg
            return None

        # Generator yielding one of:
        # - (arg, True)
        # - (arg, value)
        # - (None, value)
        # where arg is the Arg corresponding to an observed flag.
        def token_scan():
            a = 0
            while a < len(argv):
                token = argv[a]
                a += 1
                if isflag(token):
                    arg = arg_of(token)
                    if arg.is_boolean():
                        yield arg, True
                    elif a == len(argv) or isflag(argv[a]):
                        raise KillShellException(f'Value missing for flag: {token}')
                    else:
                        a += 1
                        yield arg, argv[a - 1]
                else:
                    yield None, token

        values = {arg.var: arg.default for arg in self.var_arg.values()}
        anon = []
        for arg, value in token_scan():
            if arg is None:
                anon.append(value)
            else:
                values[arg.var] = value
        if anon_arg():
            values[anon_arg().var] = anon
        elif anon:
            raise KillShellException(f'Unexpected arguments: {" ".join(anon)}')
        return values


def flag(f1, f2=None, default=None):
    return FlagArg(f1, f2, default=default)


def boolean_flag(f1, f2=None, default=False):
    return BooleanFlagArg(f1, f2, default=default)


def anon():
    return AnonArg(default=[])
