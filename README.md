# foccuss

Foccuss keeps you focused by stopping chosen applications from running during
the hours and weekdays you pick. Blocked applications and the blocking schedule
live in a small SQLite database, `foccuss.db`, in
`$XDG_DATA_HOME/Foccuss/Foccuss/`. If `XDG_DATA_HOME` is not set, the
directory is `~/.local/share/Foccuss/Foccuss/`. The monitor appends its log
to `foccuss_service.log` in the same directory.

## Install

```
pip install .
```

## Command line

```
foccuss [--database FILE] [--desktop-dir DIR ...] [--path-dir DIR ...] [COMMAND]
```

- `foccuss` or `foccuss status` prints three things: whether monitoring is
  active, whether the background service is installed and running, and the
  current schedule.
- `foccuss list` prints the blocked applications, one `name<TAB>path` per
  line.
- `foccuss installed [SEARCH]` scans desktop entries and executable
  directories and prints the installed applications. An optional wildcard
  search filters them by name. `--desktop-dir` and `--path-dir` replace the
  default directories that are scanned.
- `foccuss block PATH [--name NAME]` blocks an executable. The path must
  exist. The name defaults to the file name.
- `foccuss unblock PATH` unblocks an executable. The path must exist.
- `foccuss schedule` prints the blocking schedule. Use it with any of the
  following options to change it:
  - `--start HH:MM`
  - `--end HH:MM`
  - `--days mon,tue,...`: day names or prefixes of at least three letters
  - `--active` or `--inactive`
- `foccuss --service` runs the monitor in the foreground. It checks running
  processes every second until it is interrupted.

While the schedule is active and the current moment falls inside it, the
monitor terminates any running process whose executable path is recorded in
the blocked list. Each executable is reported once until it is no longer
running.

Schedule rules:

- Both ends of the time window are inclusive.
- A window whose end is not after its start wraps past midnight.
- The default schedule runs from 08:00 to 17:00, Monday to Friday.

Unblocking marks an entry as no longer blocked, so it leaves `foccuss list`.
The row itself stays in the database. The monitor's check, `is_app_blocked`,
matches any recorded path, so the monitor still treats that path as blocked.

## Using it as a library

```python
from datetime import datetime
from foccuss.database import Database

with Database("/tmp/foccuss.db") as db:
    db.add_blocked_app("/usr/bin/game", "Game")
    print(db.is_app_blocked("/usr/bin/game"))
    print(db.is_blocking_now(datetime.now()))
```

- `foccuss.models` holds `Week`, `BlockTimeSettings` (with `covers(moment)`)
  and `App` (with `is_valid()` and `is_running()`).
- `foccuss.database.Database` stores blocked applications and the schedule.
  It raises `DatabaseError` on failure.
- `foccuss.detector.AppDetector` finds installed applications from `.desktop`
  entries and `PATH` directories. It also lists running processes.
  `parse_desktop_entry` and `find_executable_in_directory` are available on
  their own.
- `foccuss.monitor.AppMonitor` checks running processes against the blocked
  list. Use `check_running_apps()` for a single pass, or `run_forever()` to
  keep checking.
- `foccuss.service.LinuxService` handles the background service files:
  - `create_service_file()` and `remove_service_file()` write and remove a
    systemd user unit at `~/.config/systemd/user/foccuss.service`.
  - `enable_autostart()` and `disable_autostart()` write and remove
    `~/.config/autostart/foccuss.desktop`.
- `foccuss.filtering.filter_apps` performs a case-insensitive wildcard search
  over application names. Spaces in the search act as `*`.
- `foccuss.servicelog.log_to_file` appends timestamped lines to the log.
- `foccuss.controller.BlockerController` ties these together for a front end.

## What it does not do

- There is no graphical window, tray icon or on-screen overlay. Everything
  happens through the command line or the library.
- It never runs `systemctl`. `LinuxService` only writes and removes files,
  and no command-line option writes them. Enabling and starting the unit is
  left to you.
- `foccuss status` has its own rules for the service:
  - It counts the service as installed only when
    `/etc/systemd/user/foccuss.service` exists.
  - It counts the service as running when a process was started with
    `--service`.

## Development

```
pip install -e .[test]
pytest
```