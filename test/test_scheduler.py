#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from c8vm.config import ConfigError
from c8vm.constants import STATUS_HALTED, STATUS_WAITING_FOR_KEY
from c8vm.cpu import CPU
from c8vm.decoder import UnknownOpcode
from c8vm.scheduler import Scheduler, UNCAPPED_CYCLES_PER_STEP

LOOP_PROGRAM = b"\x12\x00"  # JP 0x200
WAIT_PROGRAM = b"\xF0\x0A\x12\x02"  # LD V0, K / JP 0x202
COUNT_PROGRAM = b"\x70\x01\x12\x00"  # ADD V0, 1 / JP 0x200


class FakeClock:
    # Moves forward a little every time it's read, so busy-waits always finish
    def __init__(self, increment=0.001):
        self.time = 0.0
        self.increment = increment

    def __call__(self):
        self.time += self.increment
        return self.time


class FakeHost:
    def __init__(self, quit_after=1):
        self.quit_after = quit_after
        self.messages_processed = 0
        self.refreshes = 0

    def process_messages(self):
        self.messages_processed += 1
        return self.messages_processed >= self.quit_after

    def refresh(self):
        self.refreshes += 1


class TestScheduler(unittest.TestCase):
    def _make_scheduler(self, program=LOOP_PROGRAM, clock_speed=500):
        self.cpu = CPU(program=program)
        self.clock = FakeClock()
        return Scheduler(self.cpu, clock_speed=clock_speed, clock=self.clock)

    def test_scheduler_bad_clock_speed(self):
        cpu = CPU()
        self.assertRaises(ConfigError, Scheduler, cpu, -1)
        self.assertRaises(ConfigError, Scheduler, cpu, 1.5)
        self.assertRaises(ConfigError, Scheduler, cpu, True)

    def test_scheduler_one_second(self):
        scheduler = self._make_scheduler()
        self.cpu.timers.set_delay(100)
        self.assertEqual((500, 60), scheduler.step(1.0))
        self.assertEqual(40, self.cpu.timers.dt)

    def test_scheduler_cycles_counted(self):
        scheduler = self._make_scheduler(COUNT_PROGRAM, clock_speed=200)
        scheduler.step(0.5)
        # Half of the 100 cycles were ADDs
        self.assertEqual(50, self.cpu.registers.v[0x0])

    def test_scheduler_budget_carries_over(self):
        scheduler = self._make_scheduler(clock_speed=700)
        total_cycles = 0
        total_ticks = 0

        for _ in range(1000):
            cycles, ticks = scheduler.step(0.001)
            total_cycles += cycles
            total_ticks += ticks

        self.assertAlmostEqual(700, total_cycles, delta=1)
        self.assertAlmostEqual(60, total_ticks, delta=1)

    def test_scheduler_timers_without_cycles(self):
        # A tick's worth of time always decrements the timers, even if the CPU does nothing useful
        scheduler = self._make_scheduler(WAIT_PROGRAM)
        self.cpu.timers.set_delay(3)
        scheduler.step(0.02)
        self.assertEqual(STATUS_WAITING_FOR_KEY, self.cpu.status)
        self.assertEqual(2, self.cpu.timers.dt)
        scheduler.step(0.02)
        self.assertEqual(1, self.cpu.timers.dt)

    def test_scheduler_wait_for_key(self):
        scheduler = self._make_scheduler(WAIT_PROGRAM)
        cycles, _ = scheduler.step(1.0)
        self.assertEqual(1, cycles)  # Stops spinning once waiting
        self.cpu.keypad.press(0x9)
        self.cpu.keypad.release(0x9)
        scheduler.step(0.01)
        self.assertEqual(0x9, self.cpu.registers.v[0x0])
        self.assertEqual(0x202, self.cpu.registers.pc)

    def test_scheduler_uncapped(self):
        scheduler = self._make_scheduler(clock_speed=0)
        self.assertEqual((UNCAPPED_CYCLES_PER_STEP, 0), scheduler.step(0.0))

    def test_scheduler_pause_resume(self):
        scheduler = self._make_scheduler()
        scheduler.start()
        self.cpu.timers.set_delay(10)
        scheduler.pause()
        self.assertEqual((0, 0), scheduler.step(1.0))
        self.assertEqual(10, self.cpu.timers.dt)

        # Time spent paused isn't caught up on
        self.clock.time += 100.0
        scheduler.resume()
        cycles, ticks = scheduler.tick()
        self.assertEqual(0, ticks)
        self.assertLess(cycles, 2)

    def test_scheduler_reset(self):
        scheduler = self._make_scheduler(COUNT_PROGRAM, clock_speed=100)
        scheduler.step(0.1)
        self.assertNotEqual(0, self.cpu.registers.v[0x0])
        scheduler.request_reset()
        scheduler.step(0.0)
        self.assertEqual(0, self.cpu.registers.v[0x0])
        self.assertEqual(0x200, self.cpu.registers.pc)

    def test_scheduler_halt(self):
        scheduler = self._make_scheduler(b"\xFF\xFF")
        self.assertRaises(UnknownOpcode, scheduler.step, 0.1)
        self.assertEqual(STATUS_HALTED, self.cpu.status)

        # Timers still count down while halted
        self.cpu.timers.set_delay(10)
        self.assertEqual((1, 6), scheduler.step(0.1))
        self.assertEqual(4, self.cpu.timers.dt)
        self.assertEqual(STATUS_HALTED, self.cpu.status)

    def test_scheduler_run_until_quit(self):
        scheduler = self._make_scheduler()
        host = FakeHost(quit_after=3)
        scheduler.run(host)
        self.assertFalse(scheduler.running)
        self.assertEqual(3, host.messages_processed)
        self.assertEqual(3, host.refreshes)

    def test_scheduler_run_raises_on_halt(self):
        scheduler = self._make_scheduler(b"\x00\x00")
        self.assertRaises(UnknownOpcode, scheduler.run, FakeHost(quit_after=100))
        self.assertEqual(STATUS_HALTED, self.cpu.status)
