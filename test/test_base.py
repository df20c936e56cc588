import contextlib
import io
import os
import pathlib
import shlex
import shutil
import sys
import tempfile
import time

import dill.source

import histdump.main
import histdump.report


TEST_TIMING = False


def timeit(f):
    def timetest():
        start = time.time()
        f()
        stop = time.time()
        usec = (stop - start) * 1000000
        print(f'TEST TIMING -- {f.__name__}: {usec}')
    return timetest if TEST_TIMING else f


# Stands in for stdin: listing is piped input, interactive means a terminal.
class FakeInput(object):

    def __init__(self, listing=None, interactive=False):
        self.listing = listing
        self.interactive_input = interactive

    def interactive(self):
        return self.interactive_input

    def piped(self):
        return self.listing is not None

    def read(self):
        return self.listing


# The commands listed in a report, in order. The placeholder shows up as an empty list.
def commands_in_report(text):
    commands = []
    in_history = False
    for line in text.split('\n'):
        if line == '```bash':
            in_history = True
        elif line == '```':
            in_history = False
        elif in_history and line.startswith(' - '):
            commands.append(line[3:])
    return [] if commands == [histdump.report.PLACEHOLDER] else commands


class TestBase:
    start_dir = os.getcwd()
    test_home = pathlib.Path(tempfile.gettempdir()) / 'histdump_test_home'

    def __init__(self):
        self.failures = 0
        self.total_failures = 0
        self.base = None
        self.history_file = None
        self.reset_environment()

    # Each test starts with an empty home directory, containing neither output directory
    # nor history file.
    def reset_environment(self):
        shutil.rmtree(TestBase.test_home, ignore_errors=True)
        TestBase.test_home.mkdir(parents=True)
        os.environ['HOME'] = str(TestBase.test_home)
        os.environ['USER'] = 'tester'
        for var in ('HISTDUMP_DIR', 'HISTFILE', 'PYTHON_HISTORY'):
            os.environ.pop(var, None)
        os.chdir(TestBase.start_dir)
        self.base = TestBase.test_home / '.bash_history_tool'
        self.history_file = TestBase.test_home / '.bash_history'

    def report_path(self):
        return self.base / 'bash_history.md'

    def log_path(self):
        return self.base / 'bash_history_tool.log'

    def archive_dir(self):
        return self.base / 'archive'

    def archive_entries(self):
        archive_dir = self.archive_dir()
        return sorted(archive_dir.iterdir()) if archive_dir.exists() else []

    def write_history(self, *commands):
        self.history_file.write_text(''.join(f'{command}\n' for command in commands))

    def report_commands(self):
        return commands_in_report(self.report_path().read_text(encoding='utf-8', errors='surrogateescape'))

    def file_contents(self, path):
        with open(path, 'r', encoding='utf-8', errors='surrogateescape') as file:
            return file.read()

    def description(self, x):
        if isinstance(x, str):
            return x
        try:
            return dill.source.getsource(x).strip().split('\n')[0]
        except (OSError, TypeError, IndexError):
            return x.__name__

    def fail(self, test, message):
        print(f'{self.description(test)} failed: {message}', file=sys.__stdout__)
        self.failures += 1

    def check(self, test, ok, message):
        if not ok:
            self.fail(test, message)

    def check_eq(self, test, expected, actual):
        if expected != actual:
            print(f'{self.description(test)} failed, expected != actual:', file=sys.__stdout__)
            print(f'    expected:\n<<<{expected}>>>', file=sys.__stdout__)
            print(f'    actual:\n<<<{actual}>>>', file=sys.__stdout__)
            self.failures += 1

    def check_ok(self, test, expected, actual):
        expected = self.remove_empty_line_at_end(self.to_string(expected).split('\n'))
        actual = self.remove_empty_line_at_end(actual.split('\n'))
        self.check_eq(test, expected, actual)

    def check_substring(self, test, expected, actual):
        if expected not in actual:
            print(f'{self.description(test)} failed. Expected substring not found in actual:', file=sys.__stdout__)
            print(f'    expected:\n<<<{expected}>>>', file=sys.__stdout__)
            print(f'    actual:\n<<<{actual}>>>', file=sys.__stdout__)
            self.failures += 1

    def to_string(self, x):
        if isinstance(x, str):
            return x
        elif isinstance(x, tuple) or isinstance(x, list):
            return '\n'.join([str(o) for o in x])
        else:
            return str(x)

    def remove_empty_line_at_end(self, lines):
        if len(lines) > 0 and len(lines[-1]) == 0:
            del lines[-1]
        return lines

    # Ends a test function: reports the failures accumulated since the previous verify().
    def verify(self):
        failures = self.failures
        self.total_failures += failures
        self.failures = 0
        assert failures == 0, f'{failures} failures'

    def report_failures(self, label):
        print(f'{self.total_failures} failures: {label}')


class TestTool(TestBase):

    # test is a command line (excluding the program name), or a function returning
    # an exit status.
    def run(self,
            test,
            verification=None,
            input=None,
            expected_out=None,
            expected_err=None,
            expected_status=None):
        print(f'TESTING: {self.description(test)}')
        if verification is None:
            actual_out, actual_err, actual_status = self.run_and_capture_output(test, input)
        else:
            self.run_and_capture_output(test, input)
            actual_out, actual_err, actual_status = self.run_and_capture_output(verification, input)
        if len(actual_err) > 0 and expected_err is None and actual_status == 0:
            self.fail(test, f'Unexpected error: {actual_err}')
        if expected_out is not None:
            self.check_ok(test, expected_out, actual_out)
        if expected_err is not None:
            self.check_substring(test, expected_err, actual_err)
        if expected_status is not None:
            self.check_eq(test, expected_status, actual_status)
        return actual_out, actual_err, actual_status

    def run_and_capture_output(self, test, input=None):
        if input is None:
            input = FakeInput()
        test_stdout = io.StringIO()
        test_stderr = io.StringIO()
        with contextlib.redirect_stdout(test_stdout), contextlib.redirect_stderr(test_stderr):
            if isinstance(test, str):
                actual_status = histdump.main.run(shlex.split(test),
                                                  input_source=input,
                                                  confirm=self.confirm)
            else:
                actual_status = test()
        return test_stdout.getvalue(), test_stderr.getvalue(), actual_status

    # Interactive confirmation of clear and test. Tests that pass interactive input should set
    # the answer.
    def confirm(self, env, command):
        self.confirmations += 1
        if self.answer is None:
            raise AssertionError(f'Unexpected confirmation requested for {command}')
        return self.answer

    def reset_environment(self):
        super().reset_environment()
        self.answer = None
        self.confirmations = 0
