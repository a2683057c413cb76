# lumos

A small command-line tool for changing screen brightness on Linux. It drives
the internal laptop backlight through sysfs (`/sys/class/backlight`) and
external monitors over DDC/CI through the kernel's I2C device nodes.

## Installation

```sh
pip install .
```

The package has no dependencies outside the standard library. The brightness
popup uses `tkinter`, which needs a graphical display.

To run the tests:

```sh
pip install '.[test]'
pytest
```

## Usage

```sh
lumos --human-readable        # show raw value, max and percent
lumos --machine-readable      # print the raw brightness value only
lumos --set 60                # set brightness to 60 percent
lumos --set 400 --raw         # write a raw backlight value
lumos --adjust up             # raise by 10% of the maximum
lumos --adjust down --nodisplay
```

A `--set` value below 0 or above 100 is clamped to 0% or 100%, with a warning
on standard error. After setting or adjusting the internal backlight, a popup
shows the new level for one second. Pass `-n` / `--nodisplay` to skip it.

Errors go to standard error and the command exits with status 1.

### Choosing the backlight interface

By default the tool uses the first interface under `/sys/class/backlight`, in
name order, whose `brightness` file can be read and written and whose
`max_brightness` file can be read. To pick a specific interface, and
optionally remember your choice:

```sh
lumos --device intel_backlight --persist-device --human-readable
```

The saved interface is stored in `$XDG_CONFIG_HOME/lumos/config`, or in
`~/.config/lumos/config` if that variable is not set. It is used whenever
`--device` is not given.

### External monitors (DDC/CI)

Name the connector as listed in `/sys/class/drm`. The name is matched without
regard to case, and `HDMI-1` also matches `HDMI-A-1`:

```sh
lumos --external DP-1 --human-readable
lumos --external HDMI-1 --set 75
lumos --external HDMI-1 --adjust down
```

The tool looks for an `i2c-*` or `drm_dp_aux*` entry under the connector and
uses the matching node in `/dev` if it can be read and written. An internal
backlight interface must still be found, even when `--external` is given.

### Permissions

Writing to the brightness files normally needs root. Run the setup once as
root:

```sh
sudo lumos --setup
```

It writes `/etc/udev/rules.d/90-lumos.rules`, which gives the `video` group
write access to backlight (and, where present, LED) brightness files, reloads
and triggers udev with `udevadm`, makes the existing brightness files
group-writable and owned by `video`, and prints a summary. If a rule already
exists in `/etc/udev/rules.d` or `/lib/udev/rules.d`, it does nothing. Then
add yourself to the `video` group.

### Options

| Option | Meaning |
| --- | --- |
| `-U`, `--setup` | install udev rules (needs root) |
| `-m`, `--machine-readable` | print the raw brightness value |
| `-r`, `--human-readable` | print raw value, maximum and percent |
| `-a`, `--adjust up\|down` | step by 10% of the maximum |
| `-s`, `--set VALUE` | set brightness in percent |
| `-R`, `--raw` | treat `--set` as a raw value |
| `-n`, `--nodisplay` | do not show the popup |
| `-d`, `--device IFACE` | choose the internal backlight interface |
| `-P`, `--persist-device` | save the chosen interface |
| `-x`, `--external CONNECTOR` | target an external monitor over DDC/CI |
| `--profile-new NAME` | accepted; does nothing (see below) |
| `--profile-load NAME` | accepted; does nothing (see below) |
| `-h`, `--help` | show help |

## Library use

The modules can also be used directly:

- `lumos.backlight`: `find_backlight(interface, base)` returns a `Backlight`
  with `current()`, `maximum()`, `write(value)`, `set(value, raw)` and
  `adjust(direction)`. Failures raise `BacklightError`.
- `lumos.ddc`: `resolve_connector(connector)`, `read_brightness(device)`,
  `write_brightness(device, value)` and `adjust_brightness(device, direction)`.
  Failures raise `DDCError`.
- `lumos.config`: `config_path()`, `load_saved_interface(path)` and
  `save_interface(interface, path)`.
- `lumos.udev_setup`: `rules_text(include_leds)` and `run_udev_setup()`.
  Failures raise `SetupError`.

## Limitations

- Brightness profiles are not implemented. `--profile-new` and
  `--profile-load` are accepted and exit with status 0 without storing or
  applying anything.
- The popup is drawn with `tkinter`. Without a display it cannot be shown, and
  the command reports `Cannot open display`. Use `--nodisplay` in that case.