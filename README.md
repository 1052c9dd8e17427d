# anchorlib

Small building blocks for firmware-style applications. It is written in plain
Python and has no third-party dependencies.

## Modules

### `anchorlib.fsm`

A table-driven finite state machine. You describe it with `State` and `Event`
values and a list of `Transition(from_state, to_state, event)` entries.

```python
from anchorlib.fsm import Event, State, StateMachine, Transition

IDLE, RUNNING = State("IDLE"), State("RUNNING")
START, STOP = Event("START"), Event("STOP")

fsm = StateMachine(
    transitions=[Transition(IDLE, RUNNING, START), Transition(RUNNING, IDLE, STOP)],
    initial_state=IDLE,
    on_state_enter=lambda machine, state: print("enter", state.name),
    on_state_exit=lambda machine, state: print("exit", state.name),
)
assert fsm.process_event(START) is True
assert fsm.state == RUNNING
```

- `process_event` takes the first transition that matches the current state
  and the event. It calls `on_state_exit` for the old state and then
  `on_state_enter` for the new one. Both handlers are optional. It returns
  whether a transition was taken.
- An event that has no matching transition is ignored, and `process_event`
  returns `False`.
- An event processed from inside a handler is dropped, and `process_event`
  returns `False`.
- `reset()` goes back to the initial state without calling any handler.
- The machine reports what it does through the standard `logging` module,
  under the `anchorlib.fsm` logger.

### `anchorlib.log`

A logging core. It writes lines of the form
`<timestamp> <LEVEL> <module:><file>:<line>: <message>\n`. The message is
formatted printf-style with `%`.

```python
import sys
from anchorlib.log import Level, LogSystem

system = LogSystem(write_function=sys.stdout.write,
                   time_ms_function=lambda: 1234,
                   default_level=Level.INFO)
log = system.get_logger("net")
log.info("connected to %s", "peer")
# writes: "  0:00:01.234 INFO  net:<file>:<line>: connected to peer\n"
```

`LogSystem` options:

- `write_function`: receives each fully formatted line.
- `handler`: receives the raw `LogLine` in place of formatting and writing.
- `time_ms_function`: returns the current time in milliseconds.
- `default_level`: the threshold used by loggers whose level is
  `Level.DEFAULT`.
- `lock`: a context manager held around each write.
- `use_datetime`: show timestamps as `YYYY-MM-DD hh:mm:ss.mmm` from Unix epoch
  milliseconds instead of uptime `hhh:mm:ss.mmm`.
- `max_msg_length`: sets the default line size (`max_line_length`).

`LogSystem` raises `ValueError` in these cases:

- `default_level` is `Level.DEFAULT`.
- Neither `write_function` nor `handler` is given.
- `max_msg_length` is negative.

`LogSystem` methods:

- `log_line(...)`: filters by the default level.
- `log(...)`: logs without filtering.
- `level_is_active(logger, level)`: checks a logger's threshold.
- `format_line(log_line, size)`: formats a line to at most `size - 1`
  characters. The line always ends in a newline, even when that cuts the
  message short.

`Logger` has `debug`, `info`, `warn`, `error` and `is_active`. It records the
caller's file name and line number.

Helpers:

- `timestamp_components(timestamp, use_datetime)` splits a millisecond
  timestamp into a `TimestampComponents`.
- `is_leap_year(year)` applies the Gregorian rule.

### `anchorlib.sonar_types`

Data types for the SONAR attribute protocol:

- `AttributeOps`: the read (`R`), write (`W`) and notify (`N`) flags, and
  their combinations.
- `Attribute(attribute_id, max_size, ops)`: a frozen attribute definition. The
  id must fit in 12 bits (`MAX_ATTRIBUTE_ID`). `max_size` must not be negative.
  `ops` must be a non-empty combination of the flags. `supports(ops)` tells
  whether every requested operation is allowed.
- `LinkLayerReceiveErrors` and `LinkLayerErrors`: error counters, each with
  `clear()`.
- `SonarErrors`: holds both sets of counters. `get_and_clear()` returns a
  snapshot and then resets the counters to zero.

## What this package does not do

`anchorlib.sonar_types` holds data types only. The package has no SONAR
protocol engine:

- no packet framing or CRC
- no link layer with retries and timeouts
- no client or server endpoints
- no interactive command console

There is no command-line program.

## Running the tests

```
pip install -e .[test]
pytest
```