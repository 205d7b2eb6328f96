# apexe

apexe describes command-line tools so that AI agents can call them. Given the
structure of a CLI tool — its subcommands, flags and positional arguments — it
produces one module per leaf command, each with:

- a JSON Schema for its inputs and outputs,
- behavioural annotations (read-only, destructive, idempotent, needs approval),
- display metadata with a suggested alias,
- an `exec://` target naming the binary and command path.

Around that it offers an append-only JSONL audit log, layered configuration,
client configuration snippets for MCP hosts, and an argument parser for an
`apexe` command line.

## Describing a tool

Tools are described with plain dataclasses from `apexe.models`:
`ScannedCLITool`, `ScannedCommand`, `ScannedFlag`, `ScannedArg` and
`StructuredOutputInfo`, with value types from `ValueType` and help styles from
`HelpFormat`. Each of these has `to_dict()` and `from_dict()` for JSON or YAML
round trips; enum members serialise as lower-case strings (`"boolean"`,
`"cobra"`). `ScannedModule` is the dataclass that conversion produces.

`ScannedFlag.canonical_name()` gives the property name used in schemas: the
long form without leading dashes and with hyphens turned into underscores
(`--dry-run` becomes `dry_run`), else the short form without dashes (`-m`
becomes `m`), else `unknown`.

```python
from apexe.models import ScannedCLITool, ScannedCommand, ScannedFlag, ValueType, HelpFormat

commit = ScannedCommand(
    name="commit",
    full_command="git commit",
    description="Record changes",
    flags=[ScannedFlag(long_name="--message", short_name="-m", value_type=ValueType.STRING)],
    help_format=HelpFormat.GNU,
)
tool = ScannedCLITool(name="git", binary_path="/usr/bin/git", version="2.43.0",
                      subcommands=[commit])
```

## Converting to modules

`apexe.converter.CliToolConverter` turns a tool into modules, one per leaf
command:

```python
from apexe.converter import CliToolConverter

converter = CliToolConverter(namespace="cli")
modules = converter.convert(tool)          # module_id "cli.git.commit"
everything = converter.convert_all(tools)  # modules of all tools, in order
```

- A tool without subcommands becomes a single module named after the tool
  (`cli.ffmpeg`, target `exec:///usr/bin/ffmpeg`).
- Nested commands join their path with dots (`cli.docker.container.ls`), and
  their target adds the full command (`exec:///usr/bin/docker docker container ls`).
- A command without a description is described as `Execute <full command>`.
- Tags are `cli`, the tool name and the help format, plus `structured-output`
  when the command (or, for a root-only tool, the tool) supports it.
- A missing version is recorded as `unknown`; scan warnings are copied to every
  module; the raw help text, if any, becomes the module's documentation.
- `metadata` holds `scan_tier`, `help_format`, `binary_path` and
  `suggested_alias` (the tool name and path joined with underscores, e.g.
  `docker_container_ls`).

`apexe.converter.DisplayResolver().resolve(modules)` is applied by the
converter and adds `metadata["display"]`: an `alias`, `description`, `tags`,
and per-surface entries `cli`, `mcp` and `a2a`. The MCP alias has every
character other than letters, digits, `_` and `-` replaced by `_`. An alias
longer than 64 characters or not a valid tool name raises `ValueError`; the
converter then logs a warning and returns the modules without display metadata.

The pieces are available on their own too:

- `apexe.schema.build_input_schema(command, global_flags)` merges command
  flags, global flags (command flags win on a name clash) and positional
  arguments into an object schema with `additionalProperties: false` and a
  `required` list when anything is required. Repeatable flags and variadic
  arguments become arrays; paths and URLs carry `format: path` and
  `format: uri`; boolean flags default to `false`; defaults of integer, float
  and boolean flags are converted to numbers and booleans where they parse;
  enum values are kept under `enum`.
- `apexe.schema.build_output_schema(command)` describes `stdout`, `stderr` and
  `exit_code`, plus `json_output` when the command supports structured output.
- `apexe.annotations.infer(command)` returns `ModuleAnnotations`. It
  classifies a command by name (`delete`, `rm`, `purge` … are destructive and
  need approval; `list`, `status`, `show` … are read-only; `get`, `list`,
  `status` … are idempotent) and by flags (`--force`, `-f`, `--hard`, `--yes` …
  require approval; `--dry-run`, `--check`, `--plan` … make it idempotent).
  Read-only idempotent commands are cacheable.

## Audit log

`apexe.audit.AuditManager(audit_path)` appends one JSON line per call to
`log_execution(module_id, input_data, status, exit_code, duration_ms)`. Each
line holds `timestamp` (UTC, ISO 8601), `module_id`, `input_hash`, `status`,
`exit_code` and `duration_ms`. The input itself is not stored: `input_hash` is
a SHA-256 over a random per-manager salt and the input's canonical JSON. The
parent directory is created if needed; a failed write is logged, not raised.
`log_path()` returns the file path.

## Configuration

`apexe.config.load_config(config_path=None, cli_overrides=None)` starts from
the defaults in `ApexeConfig` (directories and audit log under `~/.apexe`, log
level `info`, timeout 30 s, scan depth 2, JSON output preferred), then
applies, in rising priority:

1. a YAML config file, by default `~/.apexe/config.yaml` (a malformed file is
   ignored with a warning),
2. the environment variables `APEXE_MODULES_DIR`, `APEXE_CACHE_DIR`,
   `APEXE_LOG_LEVEL`, `APEXE_TIMEOUT` and `APEXE_SCAN_DEPTH` (1–5; invalid
   values are ignored with a warning),
3. the override mapping, with keys `modules_dir`, `log_level`, `scan_depth`
   (1–5) and `timeout` (above 0).

If `apcore.yaml` exists in the config directory, its mapping is kept as
`core_config`. `ApexeConfig.ensure_dirs()` creates the modules, cache and
config directories; `to_dict()` and `from_dict()` convert to and from plain
data.

## Client configuration snippets

`apexe.config_gen.generate_config(format, name, transport, host, port)`
returns a JSON snippet for an MCP host: `claude-desktop` with a stdio command
(`apexe serve --transport stdio`) or, for other transports, an HTTP URL such
as `http://localhost:8000/mcp`; or `cursor` (`apexe serve`). An unknown format
gives the text `Unknown config format: <format>`. The individual generators
`generate_claude_config_stdio`, `generate_claude_config_http` and
`generate_cursor_config` are public as well.

## Command-line parsing

`apexe.cli.build_parser()` builds the parser for an `apexe` command with the
subcommands `scan`, `serve`, `list` and `config` and a global `--log-level`;
`apexe.cli.parse_args(argv)` parses with it, exiting with status 2 on invalid
input (for example `scan` without tools, `--depth` outside 1–5, `--port 0`).
`apexe.cli.execute_config(config, show, init)` prints the configuration as
YAML and/or writes a default `config.yaml` into the config directory, leaving
an existing file untouched.

## What this package does not do

- It does not scan tools: it runs no programs and reads no help output, so
  tool descriptions must be built by the caller.
- It does not serve modules: there is no MCP server, and modules are not
  written to or loaded from binding files.
- It has no access-control policy and no error types of its own beyond the
  standard exceptions named above.
- It installs no `apexe` command; only the `config` action has an
  implementation, while `scan`, `serve` and `list` are parsed but not carried out.