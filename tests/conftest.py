import sys
from pathlib import Path

import pytest

# Stand-in for wasmtime: honours the `run --invoke <fn> <module> <args...>`
# shape and the 0/1/2/3 exit-code contract, with behaviour picked by <fn>.
FAKE_ENGINE_SOURCE = r'''
import sys
import time

argv = sys.argv[1:]
if argv[:2] != ["run", "--invoke"] or len(argv) < 4:
    sys.stderr.write("error: unexpected arguments %r\n" % (argv,))
    sys.exit(2)
fn, module, args = argv[2], argv[3], argv[4:]

if fn == "add":
    print(sum(int(a) for a in args))
elif fn == "chatty":
    print("warning: module cache disabled")
    print(sum(int(a) for a in args))
elif fn == "div":
    if int(args[1]) == 0:
        sys.stderr.write("wasm trap: integer divide by zero\n")
        sys.exit(1)
    print(int(args[0]) // int(args[1]))
elif fn == "badargs":
    sys.stderr.write("error: invalid value '%s' for '<WASM>...'\n" % args[0])
    sys.exit(2)
elif fn == "sleep":
    print("partial 99", flush=True)
    time.sleep(60)
elif fn == "flood":
    sys.stderr.write("e" * 256 * 1024)
    sys.stderr.flush()
    sys.stdout.write("x" * 256 * 1024 + "\n7\n")
elif fn == "silent":
    pass
elif fn == "crash":
    sys.stderr.write("engine panicked\n")
    sys.exit(42)
else:
    sys.stderr.write("error: failed to find export `%s` in %s\n" % (fn, module))
    sys.exit(3)
'''


@pytest.fixture
def fake_engine(tmp_path: Path) -> Path:
    if sys.platform.startswith("win"):
        pytest.skip("fake engine is a shebang script")
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    path = bin_dir / "fake-wasm"
    path.write_text(f"#!{sys.executable}\n{FAKE_ENGINE_SOURCE}", encoding="utf-8")
    path.chmod(0o755)
    return path


@pytest.fixture
def wasm_module(tmp_path: Path) -> Path:
    path = tmp_path / "math.wasm"
    path.write_bytes(b"\x00asm\x01\x00\x00\x00")
    return path
