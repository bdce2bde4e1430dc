from goobj import printer, readgoobj, xyaml
from goobj.parser import parse
from goobj.utils.reader import ABytesIO
from goobj.enums import SymKind, RelocType
from objgen import symbol, stext, objfile
import asyncio
import io
import sys
import yaml
import pytest


class ForceArgs:
    def __init__(self, *args):
        self.newargs = list(args)

    def __enter__(self):
        self.oldargs = sys.argv
        sys.argv = sys.argv[:1] + self.newargs

    def __exit__(self, *e):
        sys.argv = self.oldargs


class MockStdout:
    def __init__(self):
        self.buffer = io.BytesIO()

    def __enter__(self):
        self.origstdout = sys.stdout
        sys.stdout = self

    def __exit__(self, *e):
        sys.stdout = self.origstdout

    def isatty(self):
        return False

    def write(self, x):
        self.buffer.write(x.encode())
        return len(x)

    def flush(self):
        pass


def minimal_file():
    return objfile([('go.string."hi"', 0)], b"hi",
                   [symbol(SymKind.SRODATA, 1, flags=3, size=2, datasize=2)])


def text_file():
    refs = [('"".main', 0), ("gclocals·abc", 0), ("type.int", 0), ("fmt.Println", 0)]
    syms = [
        symbol(SymKind.STEXT, 1, size=0x6e, datasize=5,
               relocs=[(1, 4, RelocType.R_CALL, 0, 4)],
               ext=stext(pcsp=3, pcfile=4, pcline=1, funcdata=[(2, 0), (9, 0)])),
        symbol(SymKind.SRODATA, 2, flags=1, size=8, gotype=3, datasize=8),
    ]
    return objfile(refs, bytes(21), syms)


def decode(data):
    return asyncio.run(parse(ABytesIO(data)))


def test_calc_max_widths():
    table = printer.Table(["a", "ab", "abc"])
    table.add_row(["ab", "ab", "ab"])
    assert table.calc_max_widths() == [2, 2, 3]
    table.add_row(["·", "", ""])
    assert table.calc_max_widths() == [2, 2, 3]
    table.add_row(["a·", "", ""])
    assert table.calc_max_widths() == [3, 2, 3]


def test_write_row_to():
    table = printer.Table([])
    out = io.StringIO()
    table.write_row_to(out, ["a", "ab"], [2, 2])
    assert out.getvalue() == " a  ab \n"


def test_print_symbols():
    out = io.StringIO()
    printer.print_symbols(decode(minimal_file()), out)
    assert out.getvalue() == (
        "The list of defined symbols:\n"
        " Offset Size Type    DupOK Local MakeTypeLink Name           Version GoType \n"
        " 0x0    0x2  SRODATA true  true  false        go.string.\"hi\" 0              \n"
    )


def test_print_symbols_text():
    out = io.StringIO()
    f = decode(text_file())
    printer.print_symbols(f, out)
    out.write("\n")
    printer.print_funcdata(f, out)
    assert out.getvalue() == (
        "The list of defined symbols:\n"
        " Offset Size Type    DupOK Local MakeTypeLink Name          Version GoType   \n"
        " 0x0    0x6e STEXT   false false false        \"\".main       0                \n"
        " 0xd    0x8  SRODATA true  false false        gclocals·abc 0       type.int \n"
        "\n"
        "The optional fields of STEXT-typed symbols:\n"
        " Name    FuncData                                    \n"
        " \"\".main 0 - gclocals·abc (0xd - 8), 1 -  (0x0 - 0) \n"
    )


def test_print_relocations():
    out = io.StringIO()
    printer.print_relocations(decode(text_file()), out)
    assert out.getvalue() == (
        "The list of relocations:\n"
        " Symbol  Offset Size Type   Target+Add    \n"
        " \"\".main 0x1    0x4  R_CALL fmt.Println+0 \n"
    )


def test_dump_yaml():
    f = decode(text_file())
    d = yaml.safe_load(xyaml.dump_yaml(f))
    assert d["datasize"] == 21
    assert d["references"][0] == {"name": '"".main', "version": 0}
    main, gclocals = d["symbols"]
    assert main["kind"] == "STEXT"
    assert main["data"] == {"offset": 0, "size": 5}
    assert main["relocations"] == [{"offset": 1, "size": 4, "type": "R_CALL", "add": 0, "sym": "fmt.Println"}]
    assert main["stext"]["pcsp"] == {"offset": 5, "size": 3}
    assert main["stext"]["pcfile"] == {"offset": 8, "size": 4}
    assert main["stext"]["funcdata"][0] == {"sym": "gclocals·abc", "offset": 0}
    assert gclocals["gotype"] == "type.int"
    assert gclocals["dupok"] is True
    assert "stext" not in gclocals

    d = yaml.load(xyaml.dump_yaml(f, with_data=True), Loader=yaml.Loader)
    assert d["symbols"][1]["content"] == bytes(8)


def test_readgoobj(tmp_path):
    path = tmp_path / "hi.o"
    path.write_bytes(minimal_file())
    with ForceArgs(str(path)):
        with MockStdout():
            readgoobj.main()
            output = sys.stdout.buffer.getvalue().decode()
    assert output.startswith("The list of defined symbols:\n Offset Size")
    assert "The optional fields of STEXT-typed symbols:\n Name FuncData \n" in output

    outfile = tmp_path / "hi.yaml"
    with ForceArgs(str(path), "--yaml", "-o", str(outfile)):
        readgoobj.main()
    assert yaml.safe_load(outfile.read_text(encoding="utf-8"))["symbols"][0]["name"] == 'go.string."hi"'

    path.write_bytes(b"junk" + text_file())
    with ForceArgs(str(path), "--relocations", "--offset", "4", "-v"):
        with MockStdout():
            readgoobj.main()
            output = sys.stdout.buffer.getvalue().decode()
    assert "R_CALL fmt.Println+0" in output


def test_readgoobj_errors(tmp_path, capsys):
    path = tmp_path / "broken.o"
    path.write_bytes(minimal_file()[:-1])
    with ForceArgs(str(path)):
        with pytest.raises(SystemExit) as e:
            readgoobj.main()
    assert e.value.code == 1
    captured = capsys.readouterr()
    assert "failed to parse" in captured.err
    assert "The list of defined symbols" not in captured.out

    with ForceArgs(str(tmp_path / "missing.o")):
        with pytest.raises(SystemExit) as e:
            readgoobj.main()
    assert e.value.code == 1


def test_readgoobj_bad_window(tmp_path, capsys):
    path = tmp_path / "hi.o"
    path.write_bytes(minimal_file())
    for args in [("--offset", "1000"), ("--length", "-5")]:
        with ForceArgs(str(path), *args):
            with pytest.raises(SystemExit) as e:
                readgoobj.main()
        assert e.value.code == 1
        assert "failed to parse" in capsys.readouterr().err


def test_readgoobj_unwritable_output(tmp_path, capsys):
    path = tmp_path / "hi.o"
    path.write_bytes(minimal_file())
    with ForceArgs(str(path), "-o", str(tmp_path / "nodir" / "x.txt")):
        with pytest.raises(SystemExit) as e:
            readgoobj.main()
    assert e.value.code == 1
    assert "failed to write" in capsys.readouterr().err
