# minijvm

Runtime data structures of a small Java virtual machine, in plain Python:
constant pools, class metadata, methods, object headers, heap objects and
primitive arrays. It has no dependencies beyond the standard library.

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

| Module | Contents |
| --- | --- |
| `minijvm.globaldefs` | `BasicType`, `JavaThreadState`, size constants, `type2size_in_bytes`, `align_up`, `align_down`, `is_aligned`, `is_power_of_2`, `nth_bit`, `right_n_bits`, `check_obj_alignment` |
| `minijvm.errors` | `VMError`, `VMErrorType`, `report_vm_error`, `vm_assert`, `guarantee`, `fatal`, `should_not_reach_here`, `warning` |
| `minijvm.byteorder` | `Endian`, `swap_u2`/`swap_u4`/`swap_u8`, big-endian `get_java_u2`/`get_java_u4`/`get_java_u8` and `put_java_u2`/`put_java_u4` |
| `minijvm.accessflags` | `AccessFlags` and the `JVM_ACC_*` constants for classes, fields and methods |
| `minijvm.constanttag` | `ConstantTagValue` and `ConstantTag` |
| `minijvm.metadata` | `Metadata`, the abstract base of class metadata |
| `minijvm.constantpool` | `ConstantPool`, with `*_at_put` writers, `*_at` readers and a javap-like `print_on` |
| `minijvm.markword` | `MarkWord`, an immutable 64-bit header word: lock state, identity hash, GC age |
| `minijvm.oop` | `Oop`, `InstanceOop`, `ArrayOop` and `TypeArrayOop`: objects holding raw field bytes addressed by offset |
| `minijvm.klass` | `Klass`, `ArrayKlass` and `KlassID` |
| `minijvm.constmethod` | `ConstMethod`, `ExceptionTableElement` and `MethodType` |
| `minijvm.method` | `Method`, `VtableIndexFlag` and `MethodFlags` |
| `minijvm.typearrayklass` | `TypeArrayKlass`, `NegativeArraySizeError`, `ArraySizeLimitError`, and the registry functions `initialize_all`, `destroy_all`, `for_type`, `for_atype` |

## Examples

A constant pool; slot 0 is unused and long/double entries take two slots:

```python
import sys

from minijvm.constantpool import ConstantPool

cp = ConstantPool(6)
cp.utf8_at_put(1, b"java/lang/Object")
cp.klass_index_at_put(2, 1)
cp.int_at_put(3, 42)
cp.long_at_put(4, 1 << 40)   # takes slots 4 and 5

assert cp.klass_name_at(2) == "java/lang/Object"
assert cp.int_at(3) == 42
cp.print_on(sys.stdout)
```

Mark words are values; every update returns a new one:

```python
from minijvm.markword import MarkWord

mark = MarkWord.prototype()
assert mark.is_neutral() and mark.age() == 0
older = mark.incr_age().copy_set_hash(0x1234)
assert older.age() == 1 and older.hash() == 0x1234
```

Primitive arrays are allocated through their array class:

```python
from minijvm.globaldefs import BasicType
from minijvm.typearrayklass import for_type, initialize_all

initialize_all()
int_array_klass = for_type(BasicType.INT)
arr = int_array_klass.allocate_array(3)
arr.int_at_put(0, 7)
assert arr.int_at(0) == 7 and arr.length == 3
assert int_array_klass.array_size_in_bytes(3) == 40   # 24-byte header, 8-byte aligned
```

A negative length raises `NegativeArraySizeError`; a length beyond the class's
`max_length` raises `ArraySizeLimitError`.

## Errors

Broken invariants raise `minijvm.errors.VMError`: out-of-range constant-pool
indexes, reading an entry as the wrong kind, bad bytecode indexes. Checks made
through `vm_assert` are skipped when Python runs with `-O`; those made through
`guarantee` always apply.

## What this package does not do

It provides data structures only. It does not parse class files, has no
class for ordinary (non-array) Java classes or their field layout, does not
load, link or initialise classes, and does not execute bytecode. There is no
managed heap or garbage collector: objects are ordinary Python objects, and
array allocation is limited only by the size checks above. There is no
command-line tool.