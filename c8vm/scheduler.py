#!/usr/bin/env python3

"""
Real-time Scheduler

Interleaves CPU cycles and 60Hz timer ticks against wall-clock time.

Each step adds the elapsed time to two separate budgets.  The CPU budget is
spent at the configured clock speed (operations per second) and the timer
budget at exactly 60 ticks per second.  Neither looks at the other, so a fast,
slow, waiting or halted CPU never changes how quickly the timers count down.

Start, pause, reset and stop requests can come from another thread.  They only
take effect at the start of a step, which is always an instruction boundary.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from time import perf_counter
from .config import check_clock_speed
from .constants import DEFAULT_CLOCK_SPEED, DISPLAY_INTERVAL, TIMER_FREQ, STATUS_RUNNING

# Cycles per step when the clock speed is uncapped
UNCAPPED_CYCLES_PER_STEP = 1000


class Scheduler:
    def __init__(self, cpu, clock_speed=DEFAULT_CLOCK_SPEED, clock=perf_counter):
        self.cpu = cpu
        self.clock_speed = check_clock_speed(clock_speed)
        self.core_interval = None if self.clock_speed == 0 else 1.0 / self.clock_speed
        self.clock = clock
        self.cpu_budget = 0.0
        self.timer_budget = 0.0
        self.running = False
        self.paused = False
        self.reset_requested = False
        self.last_time = None

    def start(self):
        self.running = True
        self.paused = False
        self.last_time = self.clock()

    def pause(self):
        self.paused = True

    def resume(self):
        # Time spent paused is thrown away, so nothing tries to catch up
        self.paused = False
        self.last_time = self.clock()

    def stop(self):
        self.running = False

    def request_reset(self):
        self.reset_requested = True

    def _handle_requests(self):
        if self.reset_requested:
            self.reset_requested = False
            self.cpu.reset()
            self.cpu_budget = 0.0
            self.timer_budget = 0.0

    def step(self, elapsed):
        # Run everything due in 'elapsed' seconds.  Returns the number of cycles and timer ticks performed.
        self._handle_requests()

        if self.paused:
            return 0, 0

        cpu = self.cpu
        timers = cpu.timers

        # Decrement the timers against actual time.  This carries on even while waiting for a key, or halted.
        self.timer_budget += elapsed
        ticks = int(self.timer_budget * TIMER_FREQ)
        self.timer_budget -= ticks / TIMER_FREQ

        for _ in range(ticks):
            timers.tick()

        if self.core_interval is None:
            cycles_due = UNCAPPED_CYCLES_PER_STEP
        else:
            self.cpu_budget += elapsed
            cycles_due = int(self.cpu_budget * self.clock_speed)
            self.cpu_budget -= cycles_due / self.clock_speed

        cycles = 0

        while cycles < cycles_due:
            cycles += 1

            if cpu.cycle() != STATUS_RUNNING:
                # Waiting for a key, or halted.  Spinning further won't change anything until the next step.
                break

        return cycles, ticks

    def tick(self):
        # One iteration of the real-time loop
        this_time = self.clock()
        elapsed = this_time - self.last_time
        self.last_time = this_time
        return self.step(elapsed)

    def run(self, host=None):
        # Keep going until stopped, or the host asks to quit.  Engine errors are raised after halting.
        self.start()
        next_display_update_time = 0

        while self.running:
            self.tick()

            if host is not None:
                this_time = self.last_time

                # Prevent unnecessary display rendering in excess of host frame rate
                if this_time >= next_display_update_time:
                    if host.process_messages():  # Process inputs at 60Hz too, to avoid slowdown
                        self.stop()

                    host.refresh()
                    next_display_update_time = this_time + DISPLAY_INTERVAL

            if self.core_interval is not None:
                # Wait for the next CPU instruction to become due.  Unfortunately we have to do this to get the
                # timing right.
                next_time = self.last_time + self.core_interval

                while self.clock() < next_time:
                    pass
