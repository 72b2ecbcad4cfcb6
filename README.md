# fontkeeper

fontkeeper installs font files (TrueType, OpenType and TrueType
collections) into a managed directory and keeps track of them in a JSON
registry, `install_fontconfig.json`, inside that directory. Fonts are
identified by the full names (name ID 4) in their `name` table, so a font
can later be removed by name alone.

It needs only the standard library and runs on POSIX systems: finding the
path behind an open file descriptor uses `/proc/<pid>/fd` where it exists,
and `fcntl.F_GETPATH` otherwise.

## Installation

```
pip install fontkeeper
```

Run the tests with:

```
pip install "fontkeeper[test]"
pytest
```

## Command line

Installing the package provides the `fontkeeper` command:

```
fontkeeper install /path/to/SomeFont.ttf
fontkeeper uninstall "Some Font Regular"
fontkeeper --install-path /srv/fonts/ install /path/to/SomeFont.ttf
fontkeeper --help
```

`--install-path` names the managed directory; it defaults to
`/data/service/el1/public/for-all-app/fonts/`. The directory must already
exist, otherwise installation fails with "Font does not exist."

On success the command prints the path of the installed (or removed) font
file and exits with status 0. On failure it prints a line such as
`fontkeeper: Font file installed. (code 31100104)` to standard error and
exits with status 1.

The same operations are available from Python:

```python
from fontkeeper.client import install_font, uninstall_font
from fontkeeper.manager import FontManager

manager = FontManager("/srv/fonts/")
path = install_font("/path/to/SomeFont.ttf", manager)
uninstall_font("Some Font Regular", manager)
```

`fontkeeper.client.real_path`, `install_error_message` and
`uninstall_error_message` are also public.

## What an install does

`FontManager.install_font(fd)` works on an open file descriptor:

1. Checks that the install directory exists and creates its `temp/`
   subdirectory if needed; creates the registry file with an empty
   `fontlist` when it is missing.
2. Reads every full name from the font (all faces of a collection). A file
   with no readable full name is rejected as unsupported.
3. Refuses the font if any of its full names is already registered, or if
   200 fonts are already installed.
4. Copies the file through `temp/` into the install directory. If a file of
   the same name is already there, the copy is stored as
   `YYYYMMDD-HHMMSS_<name>` instead.
5. Collects disk usage statistics, adds a record to the registry and
   publishes an install event carrying the comma-joined full names.

It returns the installed path. `FontManager.uninstall_font(full_name)`
looks the name up in the registry, removes the font file, deletes its
record, publishes an uninstall event and returns the removed path.

## Registry format

```json
{
	"fontlist": [
		{
			"fontfullpath": "/srv/fonts/HarmonyOS_Sans.ttf",
			"fullname": ["HarmonyOS Sans"]
		}
	]
}
```

It can be read and edited with `fontkeeper.font_config.FontConfig`:

```python
from fontkeeper.font_config import FontConfig

config = FontConfig("/srv/fonts/install_fontconfig.json")
config.insert_font_record("/srv/fonts/HarmonyOS_Sans.ttf", ["HarmonyOS Sans"])
print(config.get_font_file_by_name("HarmonyOS Sans"))  # path, or None
print(config.installed_fonts_count())
print(config.fonts_map())
config.delete_font_record("/srv/fonts/HarmonyOS_Sans.ttf")  # KeyError if absent
```

`insert_font_record` raises `OSError` when the registry cannot be read or
written and `ValueError` when it holds no font list.

## Reading font names

`fontkeeper.font_names` reads full names straight from font data:

```python
from fontkeeper.font_names import font_full_names

with open("NotoSansCJK-Regular.ttc", "rb") as f:
    print(font_full_names(f.read()))
```

`font_full_names` raises `ValueError` for data that is not a font or
declares no full name. `read_full_names(fd)` does the same for an open
descriptor, and `decode_utf16be` decodes the raw name strings.

## Error codes

Every failure is reported as a `fontkeeper.errors.FontError`, whose `code`
is a member of `fontkeeper.errors.FontErrorCode`:

| Code       | Member                      | Message from the client                     |
|------------|-----------------------------|---------------------------------------------|
| 201        | `NO_PERMISSION`             | Permission denied.                          |
| 202        | `NOT_SYSTEM_APP`            | Non-system application.                     |
| 31100101   | `FILE_NOT_EXISTS`           | Font does not exist.                        |
| 31100102   | `FILE_VERIFY_FAIL`          | Font is not supported.                      |
| 31100103   | `COPY_FAIL`                 | Font file copy failed.                      |
| 31100104   | `INSTALLED_ALREADY`         | Font file installed.                        |
| 31100105   | `MAX_FILE_COUNT`            | Exceeded maximum number of installed files. |
| 31100106   | `INSTALL_FAIL`              | Other error.                                |
| 31100107   | `UNINSTALL_FILE_NOT_EXISTS` | Font file does not exist.                   |
| 31100108   | `UNINSTALL_REMOVE_FAIL`     | Font file delete error.                     |
| 31100109   | `UNINSTALL_FAIL`            | Other error.                                |

An empty path or name given to the client is reported as "invalid param".

## Events and statistics

`fontkeeper.events.FontEventPublisher` lets other code subscribe to font
updates: `subscribe(callback)` returns a function that unsubscribes, and
each callback receives a `FontUpdateEvent` with a `FontEventType`
(`INSTALL` or `UNINSTALL`) and the affected full names.

`fontkeeper.stats.UserDataStats` reports the free space left on the data
partition (in MiB) and the size of the install directory;
`FontManager` collects these figures on every install and uninstall.

## What it does not do

- There is no background service: every install or uninstall runs in the
  calling process, and nothing checks the caller's permissions. The codes
  `NO_PERMISSION` and `NOT_SYSTEM_APP` exist but are never raised.
- Update events reach only callbacks subscribed to a `FontEventPublisher`
  in the same process; they are not broadcast to other programs.
- The statistics record from `collect_user_data_size` is returned and
  written to the `logging` module, not sent to any system event log.