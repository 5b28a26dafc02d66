# touchkit

Turns raw resistive touch panel readings into positions nominally between
0.0 and 1.0. It tracks whether the panel is untouched, touched or held, and
reports each change as an event.

Everything lives in the `touchkit.touch` module.

## Install

    pip install touchkit

## Pieces

- `TouchOrientationSettings(swapped, x_inverted, y_inverted)` is a frozen
  dataclass. It says whether X and Y are swapped and whether each axis is
  inverted. Inversion happens first, and the swap is applied to the result.
- `CalibrationHandler` maps raw readings into the 0–1 range using recorded
  minimum and maximum values.
  - `set_calibration_values(min_x, max_x, min_y, max_y)` records the bounds
    and turns calibration on.
  - `enable_calibration(state)` switches calibration on or off.
  - `calibrate_x(raw, inverted)` and `calibrate_y(raw, inverted)` scale a
    reading. When calibration is off, the raw value passes through. When
    `inverted` is true, the result is `1.0 - value`.
  - `set_x_position(x, is_max)` and `set_y_position(y, is_max)` set a single
    bound.
- `AccelerationHandler(min_ticks, accelerate, poll_interval=20)` limits how
  often events repeat while a touch is held.
  - `tick()` returns `True` when an event should be sent. The gap between
    events starts at `800 // poll_interval` ticks and halves each time, down
    to `min_ticks`.
  - `reset()` returns it to waiting.
  - When `accelerate` is false, `tick()` never returns `True`.
- `AccelerationMode` has the values `WAITING`, `ACCELERATING` and
  `NEVER_ACCELERATES`.
- `TouchState` has the values `NOT_TOUCHED`, `TOUCHED`, `HELD` and
  `TOUCH_DEBOUNCE`.
- `TouchReading(state, x=0.0, y=0.0)` is one sample from an interrogator.
- `TouchInterrogator` is the abstract source of samples. Implement
  `process_touch(orientation, calibrator)` so that it returns a
  `TouchReading`.
- `ResistiveTouchInterrogator(xp_pin, xn_pin, yp_pin, yn_pin, analog, digital, settle=None)`
  reads a four-wire resistive panel.
  - You supply the `digital` object, which must offer `pin_mode(pin, mode)`,
    `digital_write(pin, value)` and `sync()`.
  - You supply the `analog` object, which must offer `init_pin(pin, mode)`
    and `read_float(pin)`.
  - Each axis is sampled twice. If the two samples differ by more than
    `DEBOUNCE_TOLERANCE` (0.007), the reading is `TOUCH_DEBOUNCE`.
  - The panel counts as touched when `1.0 - (z2 - z1)` exceeds
    `TOUCH_THRESHOLD` (0.05).
  - `settle` is called before each measurement. By default it sleeps for
    20 µs.
- `TouchScreenManager(interrogator, orientation, scheduler=None)` is abstract.
  - Each call to `exec()` takes one reading, updates `touch_mode`, and calls
    `send_event(x, y, pressure, state)` when an event is due.
  - Negative positions are clamped to 0.
  - When the orientation is swapped, x and y are exchanged before
    `send_event` is called.
  - The `pressure` passed to `send_event` is the numeric value of the
    reading's `TouchState`.
  - While a touch is held, events are rate-limited by the acceleration
    handler. The exception is when `set_used_for_scrolling(True)` is set;
    then every held poll sends an event.
  - `exec()` returns the milliseconds to wait before the next poll:
    - 5 after a debounce,
    - 100 while the panel stays untouched,
    - 20 otherwise.
  - Other members are `start()`, `calibrate_min_max_values(...)`,
    `set_calibration(calibrator)` (stores a copy), `enable_calibration(enabled)`,
    `change_orientation(orientation)` (returns the previous orientation) and the
    read-only `orientation` property.
- `ValueStoringResistiveTouchScreen` is a manager that keeps the latest event
  in `last_x`, `last_y`, `touch_pressure` and `touch_state`. `is_pressed()` is
  true when the stored state is `TOUCHED`.

## Scheduling

Pass a `scheduler` callable taking `(delay_ms, callback)` to have the manager
queue itself:

- `start()` schedules the first `exec` with delay 0.
- Every `exec` schedules the next one.

Without a scheduler, `start()` only resets the touch mode, and you call
`exec()` yourself, using its return value as the delay.

## Example

    from touchkit.touch import (
        TouchInterrogator, TouchOrientationSettings, TouchReading,
        TouchState, ValueStoringResistiveTouchScreen,
    )

    class FixedPanel(TouchInterrogator):
        def process_touch(self, orientation, calibrator):
            x = calibrator.calibrate_x(0.25, orientation.x_inverted)
            y = calibrator.calibrate_y(0.75, orientation.y_inverted)
            return TouchReading(TouchState.TOUCHED, x, y)

    screen = ValueStoringResistiveTouchScreen(
        FixedPanel(), TouchOrientationSettings(False, False, False)
    )
    screen.start()
    delay = screen.exec()      # 20
    print(screen.is_pressed()) # True
    print(screen.last_x, screen.last_y)

## What it does not do

The package does not drive any hardware itself. `ResistiveTouchInterrogator`
only talks to the `analog` and `digital` objects you give it. The package
also has no event loop or task scheduler of its own; polling happens only
when `exec()` is called, directly or through your `scheduler`. There is no
command-line program.