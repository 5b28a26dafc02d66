"""Resistive touch panel reading, calibration, orientation and event dispatch.

Touch positions are reported as floats nominally between 0.0 and 1.0.
"""

from __future__ import annotations

import enum
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

TOUCH_THRESHOLD = 0.05
"""Minimum computed pressure for the panel to be considered touched."""

DEBOUNCE_TOLERANCE = 0.007
"""Largest difference between two consecutive samples that is accepted."""

DEFAULT_POLL_INTERVAL = 20
"""Default switch poll interval in milliseconds, used by acceleration."""

INPUT = "input"
OUTPUT = "output"
HIGH = True
LOW = False

Scheduler = Callable[[int, Callable[[], Any]], Any]


@dataclass(frozen=True)
class TouchOrientationSettings:
    """How the raw panel axes map onto the screen: swap XY, invert X, invert Y."""

    swapped: bool = False
    x_inverted: bool = False
    y_inverted: bool = False


class AccelerationMode(enum.IntEnum):
    """Internal modes of the acceleration handler."""

    WAITING = 0
    ACCELERATING = 1
    NEVER_ACCELERATES = 2


class AccelerationHandler:
    """Rate-limits repeated events while a touch is held, speeding up over time."""

    def __init__(self, min_ticks: int, accelerate: bool,
                 poll_interval: int = DEFAULT_POLL_INTERVAL) -> None:
        self.min_ticks = min_ticks
        self.poll_interval = poll_interval
        self.mode = AccelerationMode.WAITING if accelerate else AccelerationMode.NEVER_ACCELERATES
        self._ticks = 0
        self._accel = 0

    def reset(self) -> None:
        """Return to waiting so the next hold starts slowly again."""
        if self.mode == AccelerationMode.ACCELERATING:
            self.mode = AccelerationMode.WAITING

    def tick(self) -> bool:
        """Advance one poll; True when an event should be emitted."""
        if self.mode == AccelerationMode.WAITING:
            self.mode = AccelerationMode.ACCELERATING
            self._ticks = 0
            self._accel = (800 // self.poll_interval) & 0xFF
        previous = self._ticks
        self._ticks = (self._ticks + 1) & 0xFF
        if previous > self._accel:
            self._ticks = 0
            self._accel = max(self.min_ticks, self._accel // 2)
            return True
        return False


@dataclass
class CalibrationHandler:
    """Maps raw readings onto 0..1 using recorded minimum and maximum values."""

    min_x: float = 0.0
    max_x: float = 1.0
    min_y: float = 0.0
    max_y: float = 1.0
    calibration_on: bool = False

    def set_calibration_values(self, min_x: float, max_x: float,
                               min_y: float, max_y: float) -> None:
        """Record the bounds in both dimensions and turn calibration on."""
        self.min_x = min_x
        self.max_x = max_x
        self.min_y = min_y
        self.max_y = max_y
        self.calibration_on = True

    def enable_calibration(self, state: bool) -> None:
        self.calibration_on = state

    @staticmethod
    def _scale(raw: float, low: float, high: float, enabled: bool, inverted: bool) -> float:
        value = (raw - low) * (1.0 / (high - low)) if enabled else raw
        return 1.0 - value if inverted else value

    def calibrate_x(self, raw_value: float, inverted: bool) -> float:
        return self._scale(raw_value, self.min_x, self.max_x, self.calibration_on, inverted)

    def calibrate_y(self, raw_value: float, inverted: bool) -> float:
        return self._scale(raw_value, self.min_y, self.max_y, self.calibration_on, inverted)

    def set_x_position(self, x: float, is_max: bool) -> None:
        if is_max:
            self.max_x = x
        else:
            self.min_x = x

    def set_y_position(self, y: float, is_max: bool) -> None:
        if is_max:
            self.max_y = y
        else:
            self.min_y = y


class TouchState(enum.IntEnum):
    """State of the touch panel."""

    NOT_TOUCHED = 0
    TOUCHED = 1
    HELD = 2
    TOUCH_DEBOUNCE = 3


@dataclass(frozen=True)
class TouchReading:
    """One sample from an interrogator: state plus calibrated position."""

    state: TouchState
    x: float = 0.0
    y: float = 0.0


class TouchInterrogator(ABC):
    """Source of touch samples, pulled by the touch screen manager."""

    @abstractmethod
    def process_touch(self, orientation: TouchOrientationSettings,
                      calibrator: CalibrationHandler) -> TouchReading:
        """Take a sample and return its state and calibrated position."""


class TouchScreenManager(ABC):
    """Polls an interrogator, tracks touch/held state and emits events.

    ``exec`` returns the delay in milliseconds until it should run again and,
    when a scheduler was supplied, schedules itself with that delay.
    """

    def __init__(self, interrogator: TouchInterrogator,
                 orientation: TouchOrientationSettings,
                 scheduler: Optional[Scheduler] = None) -> None:
        self.acceleration = AccelerationHandler(10, True)
        self.calibrator = CalibrationHandler()
        self.interrogator = interrogator
        self.touch_mode = TouchState.NOT_TOUCHED
        self._orientation = orientation
        self.used_for_scrolling = False
        self.scheduler = scheduler

    @property
    def orientation(self) -> TouchOrientationSettings:
        return self._orientation

    def start(self) -> None:
        """Reset the touch mode and queue the first poll."""
        self.touch_mode = TouchState.NOT_TOUCHED
        if self.scheduler is not None:
            self.scheduler(0, self.exec)

    def set_used_for_scrolling(self, scrolling: bool) -> None:
        self.used_for_scrolling = scrolling

    def calibrate_min_max_values(self, x_min: float, x_max: float,
                                 y_min: float, y_max: float) -> None:
        self.calibrator.set_calibration_values(x_min, x_max, y_min, y_max)

    def set_calibration(self, calibrator: CalibrationHandler) -> None:
        self.calibrator = CalibrationHandler(
            calibrator.min_x, calibrator.max_x, calibrator.min_y,
            calibrator.max_y, calibrator.calibration_on,
        )

    def enable_calibration(self, enabled: bool) -> None:
        self.calibrator.enable_calibration(enabled)

    def change_orientation(self, orientation: TouchOrientationSettings) -> TouchOrientationSettings:
        """Set a new orientation and return the previous one."""
        old = self._orientation
        self._orientation = orientation
        logger.info("Touch orientation (SW,XI,YI) %s %s %s",
                    orientation.swapped, orientation.x_inverted, orientation.y_inverted)
        return old

    def _reschedule(self, delay: int) -> int:
        if self.scheduler is not None:
            self.scheduler(delay, self.exec)
        return delay

    def exec(self) -> int:
        """Run one poll of the panel; returns the milliseconds until the next."""
        reading = self.interrogator.process_touch(self._orientation, self.calibrator)
        touch = reading.state
        if touch == TouchState.TOUCH_DEBOUNCE:
            return self._reschedule(5)

        x = max(reading.x, 0.0)
        y = max(reading.y, 0.0)

        old_mode = self.touch_mode
        if touch == TouchState.NOT_TOUCHED:
            self.touch_mode = TouchState.NOT_TOUCHED
        elif old_mode in (TouchState.TOUCHED, TouchState.HELD):
            self.touch_mode = TouchState.HELD
        else:
            self.touch_mode = TouchState.TOUCHED

        if old_mode == TouchState.NOT_TOUCHED and self.touch_mode == TouchState.NOT_TOUCHED:
            self.acceleration.reset()
            return self._reschedule(100)

        if (self.touch_mode != TouchState.HELD or self.used_for_scrolling
                or self.acceleration.tick()):
            pressure = float(touch)
            if self._orientation.swapped:
                self.send_event(y, x, pressure, self.touch_mode)
            else:
                self.send_event(x, y, pressure, self.touch_mode)
        return self._reschedule(20)

    @abstractmethod
    def send_event(self, x: float, y: float, pressure: float, state: TouchState) -> None:
        """Receive a touch event with position in 0..1 and the current state."""


class ResistiveTouchInterrogator(TouchInterrogator):
    """Reads a four-wire resistive panel through analog and digital pin devices.

    ``digital`` must offer ``pin_mode(pin, mode)``, ``digital_write(pin, value)``
    and ``sync()``; ``analog`` must offer ``init_pin(pin, mode)`` and
    ``read_float(pin)``. Y+ and X- must be analog capable.
    """

    def __init__(self, xp_pin: int, xn_pin: int, yp_pin: int, yn_pin: int,
                 analog: Any, digital: Any,
                 settle: Optional[Callable[[], Any]] = None) -> None:
        self.xp_pin = xp_pin
        self.xn_pin = xn_pin
        self.yp_pin = yp_pin
        self.yn_pin = yn_pin
        self.analog = analog
        self.digital = digital
        self.settle = settle if settle is not None else (lambda: time.sleep(20e-6))

    def _write_synced(self, pin: int, value: bool) -> None:
        self.digital.digital_write(pin, value)
        self.digital.sync()

    def _stable_pair(self, pin: int) -> Optional[float]:
        first = self.analog.read_float(pin)
        second = self.analog.read_float(pin)
        if abs(first - second) > DEBOUNCE_TOLERANCE:
            return None
        return (first + second) / 2.0

    def process_touch(self, orientation: TouchOrientationSettings,
                      calibrator: CalibrationHandler) -> TouchReading:
        analog, digital = self.analog, self.digital

        analog.init_pin(self.yp_pin, INPUT)
        digital.pin_mode(self.xn_pin, OUTPUT)
        digital.pin_mode(self.yn_pin, INPUT)
        digital.pin_mode(self.xp_pin, OUTPUT)
        digital.digital_write(self.xp_pin, HIGH)
        self._write_synced(self.xn_pin, LOW)
        self.settle()
        raw_x = self._stable_pair(self.yp_pin)
        if raw_x is None:
            return TouchReading(TouchState.TOUCH_DEBOUNCE)
        x = calibrator.calibrate_x(raw_x, orientation.x_inverted)

        analog.init_pin(self.xn_pin, INPUT)
        digital.pin_mode(self.xp_pin, INPUT)
        digital.pin_mode(self.yp_pin, OUTPUT)
        digital.pin_mode(self.yn_pin, OUTPUT)
        digital.digital_write(self.yp_pin, HIGH)
        self._write_synced(self.yn_pin, LOW)
        self.settle()
        raw_y = self._stable_pair(self.xn_pin)
        if raw_y is None:
            return TouchReading(TouchState.TOUCH_DEBOUNCE)
        y = calibrator.calibrate_y(raw_y, orientation.y_inverted)

        digital.pin_mode(self.xp_pin, OUTPUT)
        analog.init_pin(self.yp_pin, INPUT)
        digital.digital_write(self.xp_pin, LOW)
        self._write_synced(self.yn_pin, HIGH)
        self.settle()
        z1 = analog.read_float(self.xn_pin)
        z2 = analog.read_float(self.yp_pin)
        touch = 1.0 - (z2 - z1)
        state = TouchState.TOUCHED if touch > TOUCH_THRESHOLD else TouchState.NOT_TOUCHED
        return TouchReading(state, x, y)


class ValueStoringResistiveTouchScreen(TouchScreenManager):
    """Touch screen manager that keeps the latest event for later inspection."""

    def __init__(self, interrogator: TouchInterrogator,
                 orientation: TouchOrientationSettings,
                 scheduler: Optional[Scheduler] = None) -> None:
        super().__init__(interrogator, orientation, scheduler)
        self.last_x = 0.0
        self.last_y = 0.0
        self.touch_pressure = 0.0
        self.touch_state = TouchState.NOT_TOUCHED

    def send_event(self, x: float, y: float, pressure: float, state: TouchState) -> None:
        self.last_x = x
        self.last_y = y
        self.touch_state = state
        self.touch_pressure = pressure

    def is_pressed(self) -> bool:
        return self.touch_state == TouchState.TOUCHED