# semweaver

Building blocks for tools that work with semantic convention registries.
Pure Python, no runtime dependencies.

## Modules

- `semweaver.errors`: the `WeaverError` exception base class.
  `WeaverError.compound` merges several errors into one, flattening nested
  compounds. `handle_errors` does nothing for an empty sequence, raises a
  single error as it is, and raises the compound built by the first error's
  type for several. `format_errors` joins error messages with blank lines.
- `semweaver.loggers`: the abstract `Logger` interface (`trace`, `info`,
  `warn`, `error`, `success`, `newline`, `indent`, `done`, `add_style`,
  `loading`, `same`, `log`, `mute`) and its implementations:
  - `ConsoleLogger`: writes to the console with icons; `trace` only when
    `debug_level > 0`; after `mute()` only warnings and errors are written.
  - `QuietLogger`: writes only warnings and errors.
  - `NullLogger`: discards everything.
  - `TestLogger`: writes to the console and counts warnings and errors
    (`warn_count()`, `error_count()`).
  - `InMemoryLogger`: records `LogMessage(kind, text)` entries tagged with a
    `LogKind`; `messages()`, `warn_count()` and `error_count()` read them back.
    Trace messages are recorded only when `debug_level > 0`.
- `semweaver.diagnostic`: `DiagnosticMessage.from_error` turns an exception
  into a serialisable message, picking up optional `code`, `severity`,
  `help`, `url` and `labels` attributes of the exception (`Severity`,
  `LabeledSpan`, `DiagnosticInfo`). `DiagnosticMessages` is a list of them
  that can itself be raised; it offers `empty`, `from_error`, `from_errors`,
  `extend`, `log`, `has_error`, `is_empty` and `to_json`.
  `capture_diagnostics` is a context manager that turns an exception raised
  in its block into diagnostics; `combine_diagnostics` puts an error's
  diagnostics in front of existing ones.
- `semweaver.diff`: `diff_output` returns a line diff coloured with ANSI
  codes (`-` removals in red, `+` additions in green). `diff_dir` compares
  two directory trees, reports differences on stderr and returns `True` when
  they are identical.
- `semweaver.checker`: the `Violation` record (`from_dict`, `to_dict`),
  `PolicyStage` (`before_resolution`, `after_resolution`), the
  `CheckerError` family (`InvalidPolicyFile`, `InvalidPolicyGlobPattern`,
  `InvalidData`, `InvalidInput`, `ViolationEvaluationError`,
  `PolicyViolation`, `CompoundError`), `parse_violations` for the value of a
  deny rule, and `to_diagnostic_messages`.
- `semweaver.codegen`: `Module`, `add_modules` and
  `create_single_generated_file`, which merges every `.rs` file under a
  directory that carries the generation marker into one `generated.rs` of
  nested modules; `build_log_lines` renders the warnings and errors of an
  `InMemoryLogger` as `cargo:warning=` lines.

## Examples

Line diff:

```python
from semweaver.diff import diff_output

print(diff_output("Hello, world!", "Hello, there!"))
```

Recording log messages:

```python
from semweaver.loggers import InMemoryLogger

logger = InMemoryLogger()
logger.warn("attribute is deprecated")
logger.error("missing brief")
assert logger.warn_count() == 1
assert logger.error_count() == 1
```

Collecting diagnostics from a failing block:

```python
from semweaver.diagnostic import DiagnosticMessages, capture_diagnostics

diags = DiagnosticMessages.empty()
with capture_diagnostics(diags):
    raise ValueError("bad registry")
assert len(diags) == 1
assert diags.has_error()
```

Parsing violations from evaluated policy output:

```python
from semweaver.checker import parse_violations

violations = parse_violations([
    {
        "type": "semconv_attribute",
        "id": "attr_removed",
        "category": "schema_evolution",
        "group": "registry.network1",
        "attr": "protocol.name.3",
    }
])
print(violations[0])
```

## What it does not do

- It does not evaluate policies. `checker` only describes violations and
  errors; the violation data must come from a policy evaluator elsewhere.
- It does not load, fetch or resolve semantic convention registries, and it
  does not render templates; `codegen` only assembles files that were
  already generated.
- There is no command-line tool.

## Tests

```
pip install -e ".[test]"
pytest
```