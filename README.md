# pulsar

Building blocks for a compiler of a small language that describes hardware
accelerators: source locations and diagnostics, identifier generation,
scoped name environments, union-find, a handle-based value pool, and the
core of an intermediate representation (variables, ports, IR operations,
control trees and mangled component names).

The package has no third-party dependencies.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

### `pulsar.utils`

- `pulsar.utils.id` — `Gen`, which hands out consecutive integer ids
  (`next()`), and `Gen.new_skipping(skip)` for a generator that never
  yields `skip`.
- `pulsar.utils.environment` — `Environment`, a stack of scopes over a
  permanent base scope: `push()`, `pop()` (returns `False` when only the
  base scope is left), `bind()`, `bind_base()` and `find()`.
- `pulsar.utils.disjoint_sets` — `DisjointSets` with path compression:
  `add()`, `find()`, `union(a, b, by_rank)`, `collapse()`, and iteration
  over `(node, parent)` pairs.
- `pulsar.utils.span` — `Source` (a named file or an unknown source,
  `Source.load_file(path)`), `Loc` (line, column, offset; formatted as
  `source:line:col`), `Span`, `LineSpan`, and `INDENT_WIDTH`.
  `Loc.lines(before, after)` returns the line at a location with its
  neighbours and the index of that line.
- `pulsar.utils.pool` — `Pool`, which stores values in insertion order with
  optional metadata, and `Handle`, a reference to a pool slot whose
  equality, hash and string form come from the value it refers to.
- `pulsar.utils.error` — `ErrorCode` (with `description()` and
  `from_value()`), `Level`, `Style`, `Error` (`render(color)`),
  the fluent `ErrorBuilder`, `ErrorManager` (caps the number of primary
  errors and writes them out with `consume_and_write()`), and
  `check_errors(value, error_manager, output)`, which prints recorded
  errors and raises `CompilationFailed` when `value` is `None`.

### `pulsar.ir`

- `pulsar.ir.variable` — `Variable`, shown as `i<id>` and ordered by id.
- `pulsar.ir.port` — `Port` and its kinds `Constant`, `VariablePort`,
  `PartialAccess`, `Access` and `LoweredAccess`, each with `root_var()`
  and `vars()`; `ports_used(handle)` lists a port handle with the index
  ports it reads.
- `pulsar.ir.ir` — IR operations `Add`, `Mul` and `Assign`, with `kill()`,
  `kill_var()`, `gen()`, `gen_used()`, `ports()`, `ports_used()` and the
  copying updates `with_kill()`, `with_gen()` and `with_ports()`.
- `pulsar.ir.control` — control nodes `Empty`, `Delay`, `For`, `Seq`,
  `Par`, `IfElse` and `Enable`, pretty-printed with `pretty(indent)`, and
  `ControlBuilder`, which groups pushed operations into time steps
  separated by `split()`.
- `pulsar.ir.label` — `MangledType`, `Name` (`from_native()` mangles a
  function name with its signature, `plain()` keeps it as written),
  `Visibility`, `Label`, `demangle(label)` and `MAIN_SYMBOL_PREFIX`.

## Examples

Building control:

```python
from pulsar.ir.control import ControlBuilder
from pulsar.ir.port import Constant, VariablePort
from pulsar.ir.variable import Variable
from pulsar.utils.id import Gen
from pulsar.utils.pool import Pool

gen = Gen()
x, y = Variable(gen.next()), Variable(gen.next())

builder = ControlBuilder(Pool())
builder.push_assign(x, Constant(5))
builder.split()
builder.push_add(y, VariablePort(x), Constant(1))
print(builder.build())
```

prints

```
seq {
    par {
        i0 = 5
    }
    par {
        i1 = i0 + 1
    }
}
```

Mangling and demangling a name:

```python
from pulsar.ir.label import MangledType, Name, demangle

int64 = MangledType.int64()
name = Name.from_native("main", [int64], [MangledType.array(int64, 4)])
print(name.mangled)            # pulsar_SF4main1q1A4Eq
print(demangle(name.mangled))  # a function MangledType
```

Reporting errors:

```python
import io
from pulsar.utils.error import ErrorBuilder, ErrorCode, ErrorManager

manager = ErrorManager(max_count=50)
manager.record(
    ErrorBuilder().with_code(ErrorCode.UNBOUND_NAME).message("unbound name `x`").build()
)
out = io.StringIO()
manager.consume_and_write(out)
print(out.getvalue())
```

## What the package does not do

- It has no command-line program, and no lexer, parser or type inference:
  there is nothing that reads program text and turns it into IR.
- It has no components, storage cells, control visitors, timing or
  side-effect analyses, or optimization passes. The `pulsar.ir.analysis`
  and `pulsar.ir.passes` packages are present but hold no modules.
- It emits no hardware description or other backend output.