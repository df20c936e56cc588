import importlib

import pytest

import histdump.history
from histdump.api import *

import test_base

timeit = test_base.timeit

TEST = test_base.TestTool()

try:
    readline = importlib.import_module('readline')
except ImportError:
    readline = None


def python_history_file():
    return TEST.test_home / '.python_history'


@timeit
def test_dump_given_history():
    TEST.reset_environment()
    history = histdump.history.BufferHistory(TEST.history_file, ['ls -la', 'git status', 'ls -la'])
    TEST.run(lambda: dump(history=history),
             expected_out=[f'Bash history dumped to {TEST.report_path()}'],
             expected_status=True)
    TEST.check_eq('dump', ['ls -la', 'git status', 'ls -la'], TEST.report_commands())
    TEST.check_eq('dump', 'ls -la\ngit status\nls -la\n', TEST.file_contents(TEST.history_file))
    TEST.verify()


@timeit
def test_clear_given_history():
    TEST.reset_environment()
    TEST.write_history('ls', 'pwd')
    history = histdump.history.BufferHistory(TEST.history_file)
    TEST.run(lambda: clear(history=history), expected_status=True)
    TEST.check_eq('clear', 0, len(history))
    TEST.check_eq('clear', '', TEST.file_contents(TEST.history_file))
    TEST.verify()


@timeit
def test_archive_and_failures():
    TEST.reset_environment()
    empty = histdump.history.BufferHistory(TEST.history_file)
    TEST.run(lambda: archive(history=empty),
             expected_err=f'No bash history file to archive: {TEST.report_path()}',
             expected_status=False)
    history = histdump.history.BufferHistory(TEST.history_file, ['make'])
    TEST.run(lambda: dump(history=history), expected_status=True)
    TEST.run(lambda: archive(history=history), expected_status=True)
    TEST.check_eq('archive', 1, len(TEST.archive_entries()))
    # The output directory is unusable
    not_a_dir = TEST.test_home / 'not_a_dir'
    not_a_dir.write_text('')
    TEST.run(lambda: dump(base=not_a_dir, history=history),
             expected_err=f'Not a directory: {not_a_dir}',
             expected_status=False)
    TEST.verify()


@timeit
def test_usage():
    TEST.reset_environment()
    out, _, _ = TEST.run(lambda: usage())
    TEST.check_substring('usage', 'Usage: histdump', out)
    TEST.check('usage', not TEST.base.exists(), 'output directory created')
    TEST.verify()


@pytest.mark.skipif(readline is None, reason='readline not available')
@timeit
def test_readline_session():
    TEST.reset_environment()
    readline.clear_history()
    try:
        readline.add_history('import os')
        readline.add_history('os.getcwd()')
        TEST.run(lambda: dump(),
                 expected_out=[f'Bash history dumped to {TEST.report_path()}'],
                 expected_status=True)
        TEST.check_eq('dump', ['import os', 'os.getcwd()'], TEST.report_commands())
        TEST.check_eq('dump',
                      ['import os', 'os.getcwd()'],
                      histdump.history.read_history_file(python_history_file()))
        TEST.run(lambda: archive(), expected_status=True)
        TEST.run(lambda: selftest(), expected_status=True)
        TEST.check_eq('selftest', 0, readline.get_current_history_length())
        TEST.check_eq('selftest', 0, python_history_file().stat().st_size)
        # The bash history file is not involved
        TEST.check('readline', not TEST.history_file.exists(), 'bash history file created')
    finally:
        readline.clear_history()
    TEST.verify()


@pytest.mark.skipif(readline is None, reason='readline not available')
@timeit
def test_readline_entries_kept_as_typed():
    TEST.reset_environment()
    readline.clear_history()
    try:
        # Python expressions resembling the history builtin's ordinals
        readline.add_history('3* 4')
        readline.add_history('1  + 1')
        TEST.run(lambda: dump(), expected_status=True)
        TEST.check_eq('dump', ['3* 4', '1  + 1'], TEST.report_commands())
    finally:
        readline.clear_history()
    TEST.verify()


def main():
    tests = [test_dump_given_history,
             test_clear_given_history,
             test_archive_and_failures,
             test_usage]
    if readline is not None:
        tests.extend([test_readline_session, test_readline_entries_kept_as_typed])
    for test in tests:
        try:
            test()
        except AssertionError:
            pass
    TEST.report_failures('test_api')
    return TEST.total_failures


if __name__ == '__main__':
    import sys
    sys.exit(main())
