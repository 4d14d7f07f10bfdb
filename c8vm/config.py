#!/usr/bin/env python3

"""
CPU Configuration

Quirks
------

Historical interpreters disagree on a couple of instructions.  Both behaviours
are legitimate, so the choice is made explicitly when the CPU is built and
can't be changed afterwards.

- Shift quirks          : SHR/SHL shift Vx in place.  Otherwise Vy is shifted and the result put in Vx.
- Load quirks           : LD [I], Vx and LD Vx, [I] leave I pointing past the last register transferred.
- Index increment quirks: With load quirks, I only advances by x rather than x + 1 (CHIP-48 behaviour).

Profiles pick sensible defaults for the common interpreter families, and any
flag may then be overridden individually.  'None' means use the default.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from collections import namedtuple
from .constants import CPU_QUIRKS


class ConfigError(Exception):
    pass


class InvalidQuirkCombination(ConfigError):
    pass


class Quirks(namedtuple("Quirks", ["shift_quirks", "load_quirks", "index_increment_quirks"])):
    __slots__ = ()

    def __new__(cls, shift_quirks=False, load_quirks=True, index_increment_quirks=False):
        quirks = super().__new__(cls, shift_quirks, load_quirks, index_increment_quirks)
        quirks.validate()
        return quirks

    def validate(self):
        for quirk_label, quirk_setting in self._asdict().items():
            if not isinstance(quirk_setting, bool):
                raise InvalidQuirkCombination("{} must be True or False, not {!r}".format(quirk_label, quirk_setting))

        if self.index_increment_quirks and not self.load_quirks:
            raise InvalidQuirkCombination("Index increment quirks have no effect unless load quirks are enabled")


PROFILES = {
    "chip8":  Quirks(shift_quirks=False, load_quirks=True, index_increment_quirks=False),   # COSMAC VIP
    "chip48": Quirks(shift_quirks=True, load_quirks=True, index_increment_quirks=True),     # HP-48 CHIP-48
    "schip":  Quirks(shift_quirks=True, load_quirks=False, index_increment_quirks=False)    # Super-CHIP 1.1
}

DEFAULT_PROFILE = "chip8"


def make_quirks(profile=DEFAULT_PROFILE, **overrides):
    try:
        quirks = PROFILES[profile]
    except KeyError:
        raise ConfigError("Unknown profile '{}'".format(profile)) from None

    quirk_settings = {}

    for cpu_quirk in CPU_QUIRKS:
        quirk_label = "{}_quirks".format(cpu_quirk)
        quirk_setting = overrides.pop(quirk_label, None)

        if quirk_setting is not None:
            quirk_settings[quirk_label] = bool(quirk_setting)

    if overrides:
        raise ConfigError("Unknown quirk settings: {}".format(", ".join(sorted(overrides))))

    return Quirks(**quirks._replace(**quirk_settings)._asdict())


def check_clock_speed(clock_speed):
    # 0 means uncapped
    if not isinstance(clock_speed, int) or isinstance(clock_speed, bool) or clock_speed < 0:
        raise ConfigError("Clock speed must be a whole number of operations per second, 0 or above")

    return clock_speed
