# koder

Building blocks for a programmer's text editor. The package keeps the editor's
settings and state and reads its configuration files. It has no user interface.

## Modules

### `koder.utils`

- `get_file_name(filename)` returns the name without its last extension.
  `get_file_extension(filename)` returns that last extension, or `""` if there is none.
  A leading dot, as in dotfiles, is not an extension separator.
- `parse_file_argument(argument)` splits `path:line:column` and returns a
  `FileArgument(filename, line, column)` named tuple. A missing line or column
  comes back as `-1`. If the line or column part is not a number, the whole
  argument is taken as the file name.
- `rgb_to_sci_color(red, green, blue)` packs 0–255 channels into a BGR integer.
  A channel outside that range raises `ValueError`.

### `koder.editorconfig`

- `find_editorconfig(file_path)` returns the nearest `.editorconfig` above a file, or `None`.
- `parse(filename)` reads the file into a `{section: {key: value}}` dict.
- `glob_to_regex(pattern)` turns a section glob into a regular expression. It
  raises `ValueError` on unbalanced braces.
- `match_filename(filename, all_properties)` merges the properties of every
  section that matches. Later sections override earlier ones.

### `koder.backup`

- `BackupFileGuard(path)` is a context manager. It copies a file to `path~`.
  The copy is removed on close only if `save_successful()` was called.
  `backup_path` tells where the copy is.
- `can_write(path)` reports whether any write bit is set on the file and its volume is writable.
- `set_writable(path, writable)` adds write bits, within what the umask
  allows and always for the owner, or removes all of them.

### `koder.preferences`

`Preferences` is a dataclass that holds every editor setting with its default.
The settings cover tabs, margins, line limit, indentation guides, font, style,
window frame and find panel state.

- `load(filename)` and `save(filename)` read and write the settings as JSON.
  `save` writes under a `BackupFileGuard`.
- A missing or malformed file loads as defaults.
- Permission, memory and invalid-path failures raise `PreferencesError`.
- `copy()` returns an independent copy.

The enums `LineLimitMode` and `IndentGuidesMode` and the `Rect` dataclass are used by the settings.

### `koder.find_history`

- `MruHistory` keeps recent entries, oldest first, up to 10. It skips an entry
  that repeats the newest one.
- `FindPanel(state, settings_dir)` holds the panel's options, find text and
  replace text, and a history for each.
- `submit(action, find_text, replace_text)` records the texts and returns a
  `FindRequest`. The request has `new_search` set when the texts or the options
  changed since the last submit.
- The history is stored as JSON in `settings_dir/findreplace_mru`.

### `koder.styler`

- `load_theme(name, data_dirs)` merges `<dir>/styles/<name>.yaml` from every
  data directory into a `Theme`. It raises `StyleFilesNotFoundError` when no
  directory has the file.
- `Theme.styles_for_language(style_mapping)` resolves a lexer-style to theme-style mapping into `Style` values.
- `available_styles(data_dirs)` lists the installed themes.
- `css_to_int` converts `#rrggbb` to BGR. `style_from_node` reads one style entry.

### `koder.languages`

- `Languages.load(data_dirs)` reads `<dir>/languages.yaml`. It maps extensions
  to languages (`language_for_extension`) and languages to menu labels
  (`menu_item_name`).
- `Languages.load_spec(lang, data_dirs)` merges `<dir>/languages/<lang>.yaml`
  into a `LanguageSpec`. The spec holds the lexer name, properties, keywords,
  identifiers, comment tokens and style mappings.
- `LanguageSpec.style_mapping(substyle_starts)` gives the full style mapping, substyles included.

## What it does not do

This package has no editor window, no text widget and no command-line program. It
does not lex or highlight text itself. It works out which lexer, settings and
styles apply, and leaves rendering to whatever editor component uses it.

## Example

```python
from koder.utils import parse_file_argument

path, line, column = parse_file_argument("src/main.py:12:4")
# ("src/main.py", 12, 4)
```

## Running the tests

```
pip install ".[test]"
pytest
```