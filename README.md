# hookpilot

Building blocks for a Git hook runner: turning a configured command into
shell command lines, narrowing the files it is given, deciding the order in
which commands run, running them, and printing what happened.

- `hookpilot.version`: the package version and the `min_version` check.
- `hookpilot.templates`: the checksum line written next to installed hooks,
  and the executable suffix for a platform.
- `hookpilot.result`: `Result` and `Status`, the outcome of one command or
  script.
- `hookpilot.log`: levelled, coloured console output with a progress spinner.
- `hookpilot.executor`: `CommandExecutor` runs commands through the shell,
  one chunk after another.
- `hookpilot.filters`: narrows a file list by glob, exclude regexp and root.
- `hookpilot.commands`: fills `{0}`, `{1}`… and file placeholders into a
  command and splits it into chunks that fit the shell's command-line limit.
- `hookpilot.ordering`: the order in which a hook's commands run.

It needs nothing beyond the standard library and works on Python 3.10 and later.

## Examples

Check that a configuration's `min_version` is satisfied:

```python
from hookpilot.version import VersionError, check_covered, version

version()                     # '1.6.0'
check_covered("1.2")          # fine
try:
    check_covered("99.0.0")
except VersionError as exc:
    print(exc)                # required hookpilot version is higher than current
```

A malformed version such as `"1.x"` also raises `VersionError`.

Filter files before handing them to a command:

```python
from hookpilot.filters import apply, by_exclude, by_glob, by_root

by_glob(["folder/sub/0.rb", "1.txt", "2.RB"], "*.rb")    # ['folder/sub/0.rb', '2.RB']
by_exclude(["f.a", "f.b", "f.c"], r".*\.(a|b)$")          # ['f.c']
by_root(["folder/sub/0.rb", "1.rbs"], "folder/sub/")      # ['./0.rb']
apply(["a.md", "b.sh"], glob="*.md")                      # ['a.md']
```

Glob matching ignores case, and `*` matches across directories. `{a,b}`
alternatives and `[...]` classes are supported.

Substitute arguments and files into a command, keeping the quoting the
command asks for:

```python
from hookpilot.commands import Template, replace_in_chunks, replace_positional_arguments, replace_quoted

replace_positional_arguments("lint {0} --first {1}", ["a", "b"])
# 'lint a b --first a'

replace_quoted("echo '{staged_files}'", "{staged_files}", ["test.rb", "README"])
# "echo 'test.rb' 'README'"

run = replace_in_chunks(
    "echo {staged_files}",
    {"{staged_files}": Template(files=["file1", "file2", "file3"], cnt=1)},
    10,
)
run.commands   # ['echo file1', 'echo file2', 'echo file3']
run.files      # ['file1', 'file2', 'file3']
```

File names are shell-quoted before they are substituted. `max_command_length()`
gives the limit to pass for the current platform.

Order commands:

```python
from hookpilot.ordering import sort_commands

sort_commands(["10_a", "1_a", "2_a", "5_a"])
# ['1_a', '2_a', '5_a', '10_a']
sort_commands(["10_a", "1_a", "2_a", "5_a"], {"5_a": 10, "2_a": 1})
# ['2_a', '5_a', '1_a', '10_a']
```

Run a command and collect its output:

```python
import io
from hookpilot.executor import CommandExecutor, ExecuteOptions

out = io.BytesIO()
CommandExecutor().execute(ExecuteOptions(name="greet", commands=["echo hi"]), out)
```

A failing command raises `subprocess.CalledProcessError`. Values in
`ExecuteOptions.env` have their names upper-cased and `$VAR` references
expanded (see `build_env`). On systems other than Windows, non-interactive
commands run in a pseudo-terminal.

Print output:

```python
from hookpilot import log

log.set_level(log.Level.DEBUG)
log.info(log.cyan("summary:"), log.gray("(done)"))
log.styled().with_left_border(log.NORMAL_BORDER, "cyan").with_padding(2).info("lint")
log.set_colors(False)
```

Colours are off when `NO_COLOR` is set in the environment.

## What it does not do

hookpilot is a library only. It has no command-line program, does not read
a configuration file, does not install or remove hooks in a repository and
does not ask git for staged or pushed files; the caller supplies the file
lists and commands and decides what to do with each `Result`.

## Tests

The test suite uses pytest; install the `test` extra to get it.