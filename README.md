# pycgen

`pycgen` holds the front-end pieces of a compiler from a subset of Python to C.
It has no runtime dependencies. The modules are:

- **`pycgen.tokens`**: token kinds (`TokenKind`), the `Token` record
  (`kind`, `sub`, `start`, `end`, `packed`, `text()`, `is_kind()`) and the
  fixed tables of keywords, symbols and word operators. `symbol_token`,
  `keyword_token` and `word_operator_token` map table entries to a kind and
  sub-code.
- **`pycgen.lexer`**: `Lexer` and `tokenize`, which turn source text into
  tokens. They handle:
  - comments, `\` line continuations, and newline and `;` line breaks;
  - merging `not in` and `is not` into single operators;
  - numeric literals with underscores and `0x`/`0o`/`0b` prefixes;
  - quoted and triple-quoted strings.

  The `Lexer` interns identifiers, integers and floats in its `identifiers`,
  `integers` and `floats` lists. A token's `sub` is its index in those lists.
  `parse_number` parses a literal on its own and raises `ValueError` on bad
  input.
- **`pycgen.errors`**: `PycSyntaxError`. Its text shows the offending line, a
  caret under the column and the message. With `with_line` set, the message is
  followed by the line number. The helpers `index_position`, `line_bounds`,
  `format_error` and `readable` are also available.
- **`pycgen.vartypes`**: `VariableClass` and `VariableType`, the static types
  a variable can have. These include values known ahead of time, which are
  held in `constant`. The module also has `copy()`, structural equality
  (`types_equal`, `type_lists_equal`) and `c_type_name()`.
- **`pycgen.scope`**: nested `Scope` objects. They hold `Variable` bindings,
  which are numbered from 1 across a scope and the scopes inside it, and the
  indented C text written for the block.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Tokenizing

```python
from pycgen.lexer import tokenize

source = "x = 0b1010 if a is not b else 1_000\n"
for token in tokenize(source):
    print(token.kind.name, repr(token.text(source)))
```

To get at the interned tables, use `Lexer`:

```python
from pycgen.lexer import Lexer

lexer = Lexer("a = 12\nb = a\n")
tokens = lexer.tokenize()
print(lexer.identifiers)  # ['a', 'b']
print(lexer.integers)     # [12]
```

Malformed input raises `PycSyntaxError`:

```python
from pycgen.errors import PycSyntaxError
from pycgen.lexer import tokenize

try:
    tokenize("x = 012\n")
except PycSyntaxError as err:
    print(err)
```

This prints:

```
x = 012
    ^
SyntaxError: leading zeros in decimal integer literals are not permitted; use an 0o prefix for octal integers
```

The error also exposes `index`, `line`, `column`, `message` and `report`.

## Types and scopes

```python
from pycgen.scope import Scope
from pycgen.vartypes import VariableClass, VariableType

scope = Scope(indent=1)
int_type = VariableType(VariableClass.AOT_INT, constant=42)
index, created = scope.set_variable(0, int_type)
if created:
    scope.append("")
    scope.write_type(int_type)
    scope._content  # text so far is kept internally; use render() to read it
print(scope.render())  # "    mpz_t"
```

`VariableType.c_type_name()` gives the C type for a value:

| Value kind | C type   |
|------------|----------|
| integers   | `mpz_t`  |
| floats     | `double` |
| strings    | `string` |
| booleans   | `_Bool`  |

Other kinds give an empty string.

## What is not included

The package has no parser and no command-line tool. It does not write out a
complete C file. The pieces above are for tokenizing, type bookkeeping and
building up scoped C text. Putting them together into a full compiler is left
to the caller.