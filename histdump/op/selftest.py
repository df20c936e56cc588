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

import logging

import histdump.core
import histdump.exception
import histdump.op.clear
import histdump.op.dump

SUMMARY = 'Run tests for dump and clear functions'

logger = logging.getLogger(__name__)


# Smoke test against the real history: dump, check for the report, clear, check that the
# history is gone. Stops at the first failure.
class SelfTest(histdump.core.Op):

    def run(self):
        env = self.env
        logger.info('Starting tests')
        self.run_stage('Dump', histdump.op.dump.Dump(env))
        self.check('Dump', env.locations.report().exists())
        self.run_stage('Clear', histdump.op.clear.Clear(env))
        history_file = env.locations.history_file()
        self.check('Clear',
                   history_file.exists() and history_file.stat().st_size == 0 and len(env.history) == 0)
        self.report('All tests passed')

    def destructive(self):
        return True

    def run_stage(self, stage, op):
        try:
            op.run()
        except histdump.exception.KillCommandException as e:
            logger.error(f'{stage} test: FAIL: {e}')
            raise histdump.exception.SelfTestException(stage, e)

    def check(self, stage, ok):
        if ok:
            self.report(f'{stage} test: PASS')
        else:
            logger.error(f'{stage} test: FAIL')
            raise histdump.exception.SelfTestException(stage)
