# barblocks

Building blocks for a Linux status bar. Each block reads some part of the
system state. From it, the block works out a widget state (`State.IDLE`,
`INFO`, `GOOD`, `WARNING` or `CRITICAL`) and the values a bar template
shows. A block that fails raises `barblocks.state.BlockError`.

## Blocks

### Load: `barblocks.load`

`Load` reads `/proc/cpuinfo` once to count the logical cores. Each
`update()` reads `/proc/loadavg` and returns the interval in seconds until
the next update. The one-minute load per core is compared with the `info`,
`warning` and `critical` thresholds of `LoadConfig`. Each threshold must be
exceeded; the defaults are 0.3, 0.6 and 0.9. The helpers
`count_logical_cores`, `parse_loadavg` and `load_state` work on text you
pass in.

### Maildir: `barblocks.maildir`

`count_mail(path, mail_type)` counts the messages in one maildir. It counts
the files in `new`, in `cur` or in both (`MailType`) and skips dot-files.
`check_inboxes(config)` adds up the counts of all inboxes in a
`MaildirConfig` and returns the total with a state. The state is warning
from `threshold_warning` messages and critical from `threshold_critical`
messages; both limits are inclusive.

### Memory: `barblocks.memory`

`parse_meminfo` collects the figures the block needs from `/proc/meminfo`.
`compute_values` turns them into a `MemoryValues` of byte counts and
percentages. It covers total, free, used, available, buffers, cached and
swap. `Memory.update()` reads the files and adds the ZFS ARC size from
`/proc/spl/kstat/zfs/arcstats` to the cache when that file exists. It then
sets the state of the current view. `Memory.switch()` toggles between the
memory view and the swap view.

### Network: `barblocks.net` and `barblocks.netparse`

`NetworkDevice.from_device(name)` inspects `/sys/class/net/<name>` and
tells whether the device is wireless or a VPN (tun/tap, WireGuard, PPP).
The device then offers:

- `exists()` and `is_up()`;
- `tx_bytes()` and `rx_bytes()`;
- `icon_name()`;
- `ip_addr()` and `ipv6_addr()`, which run `ip -json`;
- `bitrate()`, which runs `iw` for wireless devices and `ethtool` for wired
  ones.

`NetworkDevice.default_device()` finds the device of the default route with
`ip route show default`. `TrafficCounter` turns a growing byte counter into
bytes per second and keeps the last few rates. `netparse` holds the parsers
for the output of these tools. It also has `decode_escaped_unicode`, which
decodes SSIDs, and `signal_percents`, which converts dBm to a percentage.

### Keyboard layout: `barblocks.keyboard_layout` and `barblocks.xkb`

The layout can come from three sources:

- `SetXkbMap` runs `setxkbmap -query`.
- `KbddLayout` picks one layout from that list by the index you give it
  through `set_layout_id`.
- `SwayLayout` splits a sway layout name such as `English (US)` into a
  layout and a variant. You give it the name through `set_layout_name`.

`KeyboardLayout` renders the current layout with a `str.format` template
(`{layout}`, `{variant}`). It applies `mappings` such as
`{"German (dead acute)": "DE"}` first.

### Music: `barblocks.music`, `barblocks.music_trim` and `barblocks.music_metadata`

- `extract_from_metadata` and `extract_playback_status` read MPRIS
  property values.
- `PlayerList` keeps the players you track. It applies `PropertiesChanged`
  and `NameOwnerChanged` data to them, and `rotate()` switches to the next
  player.
- `ignored_player` filters bus names by preferred player and by exclude
  patterns.
- `combo_text` and `smart_trim` fit "title - artist" into `max_width`,
  trimming both parts in proportion to their length.

### KDE Connect: `barblocks.kdeconnect`, `barblocks.kdeconnect_state` and `barblocks.kdeconnect_signals`

`signal_from_args(interface, member, args)` decodes a KDE Connect signal
into a typed dataclass and checks the argument types.
`PhoneState.apply(signal)` updates the name, battery, notification count
and reachability of the phone. It returns whether the block should redraw.
`phone_values` builds the template values and `phone_widget_state` picks
the state from battery thresholds, notifications and reachability.
`is_old_kdeconnect` recognises the version output of daemons 20.08.3 and
older.

## Example

```python
from barblocks.load import Load, LoadConfig

block = Load(LoadConfig())
print(block.update(), block.state)
```

```python
from barblocks.memory import parse_meminfo, compute_values

with open("/proc/meminfo") as fh:
    values = compute_values(parse_meminfo(fh.read()))
print(values.mem_used_percents)
```

```python
from barblocks.netparse import decode_escaped_unicode

print(decode_escaped_unicode(rb"\xf0\x9f\x8c\xb3oak"))  # 🌳oak
```

## What the package does not do

There is no status bar program and no command to run. Nothing writes the
i3bar/swaybar protocol or handles click events. The package does not
connect to D-Bus or to sway's IPC. For kbdd, sway, MPRIS players and
KDE Connect, the caller listens for events and passes them to
`KbddLayout`, `SwayLayout`, `PlayerList` or `PhoneState`. The
`localebus` driver value exists in `KeyboardLayoutDriver`, but there is no
layout source for it. The `format` settings of the network, music and
KDE Connect configs are stored but not rendered.

## Requirements

Python 3.10 or later on Linux. The package has no third-party dependencies.
Some functions run external tools:

- `ip`, `iw` and `ethtool` in `barblocks.net`;
- `setxkbmap` in `barblocks.xkb` and `barblocks.keyboard_layout`.

## Running the tests

```
pip install -e .[test]
pytest
```