# byedroid

Helpers for the everyday Android loop (build, install, watch the logs),
driven from Python.

- **Project inference** (`byedroid.project`) reads the app module's
  `build.gradle` or `build.gradle.kts` and works out the application IDs,
  the flavor dimensions and the default `assemble…Debug` / `install…Debug`
  tasks.
- **Configuration** (`byedroid.config`) is stored in `.byedroid.toml` in the
  project root, with a global `config.toml` in the user's config directory.
  `byedroid.scaffold` can create the project file from inference.
- **Logcat** (`byedroid.logcat`) parses lines into entries, spots crashes and
  ANRs, filters by PID, tag, level, content and exclude substrings, and can
  follow `adb logcat` in the background.
- **Gradle** (`byedroid.build`) and **scrcpy** (`byedroid.mirror`) are started
  as child processes. Gradle output is passed line by line to a callback.
- **Text helpers** (`byedroid.textfmt`, `byedroid.statusline`) provide the
  wrapping, truncation, padding, centring and status labels that a terminal
  front end needs.

## Project inference

```python
from pathlib import Path
from byedroid.project import infer_project, infer_from_gradle_text

inference = infer_project(Path("."))
print(inference.application_ids)   # e.g. ['com.example.app', 'com.example.app.dev']
print(inference.assemble_task)     # e.g. 'assembleDevDebug'
print(inference.install_task)      # e.g. 'installDevDebug'
print(inference.variant_summary)   # e.g. 'DevDebug'
print(inference.gradle_file)       # the build file that was read, or None

text = 'android { defaultConfig { applicationId "com.example.app" } }'
infer_from_gradle_text(text).assemble_task   # 'assembleDebug'
```

`find_app_gradle(root)` looks for `app/build.gradle` and then
`app/build.gradle.kts`. If neither exists, it takes the first subdirectory
whose build file mentions `com.android.application`. If no app module is
found, `infer_project` returns an inference with no tasks and the summary
`"no app/build.gradle"`.

When there are several flavor dimensions, the dimensions are taken in the
order they are declared, and for each one the alphabetically first flavor is
picked. Every `applicationIdSuffix` in the file is added to the base ID.

## Configuration

```python
from pathlib import Path
from byedroid.config import load_merged_config, save_project_config, ProjectConfig
from byedroid.scaffold import run_init

cfg = run_init(Path("."))              # writes .byedroid.toml, prints it, returns it
merged = load_merged_config(Path("."))
print(merged.project.packages, merged.global_config.preferred_device_serial)

save_project_config(Path("."), ProjectConfig(package="com.example.app"))
```

`run_init` fills in `packages`, `assemble_task`, `install_task` and `variant`
from inference, and sets `log_level` to `"D,I,W,E,V"`.

`.byedroid.toml` is read in preference to `.droid-loop.toml`, which is used
only when it is the sole file present. The project keys are `package`,
`packages`, `variant`, `gradle_tasks`, `log_filters`, `exclude_filters`,
`log_level`, `assemble_task`, `install_task` and `scrcpy_args`. If a value has
the wrong type, a `ValueError` is raised.

The global config (`GlobalConfig`: `preferred_device_serial`,
`default_log_level`) is read from `byedroid/config.toml` under the user config
directory, or from `droid-loop/config.toml` if only that one exists. It is
written with `save_global_config`. `load_merged_config` falls back to defaults
when the global file is missing or cannot be read.

## Logcat

```python
from byedroid.logcat import (
    LogcatFilter, is_crash_start, matches_level_filter, parse_log_line, tag_color,
)

entry = parse_log_line("02-03 15:44:41.704  2359  3654 I MyTag: hello world")
entry.tag, entry.level, entry.message, entry.pid   # ('MyTag', 'I', 'hello world', '2359')

flt = LogcatFilter(exclude_substrings=["chatty"], levels="D,I,W,E")
flt.allows(entry, [])                    # True
matches_level_filter("E,F", "W")         # False

cache: dict[str, int] = {}
tag_color("MyTag", cache)                # 'red': the first tag seen gets the first colour
```

`parse_log_line` returns `None` for lines with fewer than six fields.
`is_crash_start` and `is_crash_continuation` classify lines of a crash or ANR
block, and `CrashEvent` holds such a block. `matches_any_exclude_with_cached`
checks excludes against an entry's precomputed, lowercased search text.
`level_style` and `tag_color` return colour names.

`spawn_logcat_reader(adb_path, device, sink)` runs
`adb -s <device> logcat -T 10000 -v threadtime` and returns the `Popen`
object. Each stdout line is passed to `sink`. Stderr lines are passed too,
prefixed with `[adb logcat stderr] `.

## Builds and mirroring

```python
from pathlib import Path
from byedroid.build import find_gradle, spawn_gradle
from byedroid.mirror import detect_scrcpy_display, launch_scrcpy, parse_scrcpy_display

gradle = find_gradle(Path("."))          # ./gradlew, ./gradlew.bat, or gradle on PATH
spawn = spawn_gradle(gradle, Path("."), ["assembleDebug"], None, print)
spawn.child.wait()
```

Gradle output lines arrive prefixed with `[stdout]` or `[stderr]`. If a
device serial is given, it is passed to Gradle as `ANDROID_SERIAL`. If the
process cannot be started, `RuntimeError` is raised.

`launch_scrcpy(serial, extra_args)` starts scrcpy with its streams detached
and, on POSIX, in its own process group. It raises `RuntimeError` if scrcpy
is not on `PATH`. `detect_scrcpy_display(adb_path, serial)` runs
`dumpsys display` on the device. It and `parse_scrcpy_display(output)` return
the display ID of a scrcpy virtual display, or `None`.

## Text helpers

```python
from byedroid.textfmt import Rect, build_history_summary, centered_rect, truncate, word_wrap
from byedroid.statusline import line_count_label, short_task, status_text

truncate("abcdef", 4)                           # 'abc…'
word_wrap("hello world foo", 11)                # ['hello', 'world foo']
centered_rect(20, 10, Rect(0, 0, 80, 24))       # Rect(x=30, y=7, width=20, height=10)
build_history_summary([10.0, 20.0])             # '2 builds  ·  avg 15.0s  ·  last 20.0s'
short_task("assembleDevDebug")                  # 'DevDebug'
line_count_label(1500)                          # '1k lines'
status_text(None, 0, 0, False, 1, 42)           # '1 device  ·  42 log lines'
```

The other helpers are `right_pad`, `android_version_label`,
`crash_count_label` and `build_action_label`.

## What this package does not do

It is a library only. It provides no interactive terminal screen and no
command-line command. It does not list connected devices or look up the PIDs
of a running app: pass the PIDs to `LogcatFilter.allows` yourself. It does
not run checks on the local toolchain for you.

## Requirements

- Python 3.11 or later.
- `adb` and either a Gradle wrapper or `gradle`, for the functions that start
  them.
- `scrcpy` on the `PATH`, optionally, for mirroring.