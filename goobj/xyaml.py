"""YAML export of decoded object files"""
import yaml


def _addr(addr):
    return {"offset": addr.offset, "size": addr.size}


def _extended(objfile, ext):
    return {
        "args": ext.args,
        "frame": ext.frame,
        "leaf": ext.leaf,
        "cfunc": ext.cfunc,
        "typemethod": ext.type_method,
        "sharedfunc": ext.shared_func,
        "nosplit": ext.nosplit,
        "locals": [{"sym": objfile.reference(loc.sym_index).name,
                    "offset": loc.offset,
                    "type": loc.type,
                    "gotype": objfile.reference(loc.gotype_index).name}
                   for loc in ext.locals],
        "pcsp": _addr(ext.pcsp),
        "pcfile": _addr(ext.pcfile),
        "pcline": _addr(ext.pcline),
        "pcinline": _addr(ext.pcinline),
        "pcdata": [_addr(a) for a in ext.pcdata],
        "funcdata": [{"sym": objfile.reference(i).name, "offset": off}
                     for i, off in zip(ext.funcdata_index, ext.funcdata_offset)],
        "files": [objfile.reference(i).name for i in ext.file_index],
    }


def to_dict(objfile, with_data=False):
    """Converts a DecodedFile into plain python objects, with every reference index resolved to its name"""
    symbols = []
    for sym in objfile.symbols:
        ref = objfile.reference(sym.id_index)
        out = {
            "name": ref.name,
            "version": ref.version,
            "kind": str(sym.kind),
            "size": sym.size,
            "dupok": sym.dupok,
            "local": sym.local,
            "typelink": sym.typelink,
            "gotype": objfile.reference(sym.gotype_index).name,
            "data": _addr(sym.data_addr),
            "relocations": [{"offset": r.offset,
                             "size": r.size,
                             "type": str(r.type),
                             "add": r.add,
                             "sym": objfile.reference(r.id_index).name}
                            for r in sym.relocations],
        }
        if with_data:
            out["content"] = objfile.symbol_data(sym.data_addr)
        if sym.extended is not None:
            out["stext"] = _extended(objfile, sym.extended)
        symbols.append(out)

    return {
        "references": [{"name": r.name, "version": r.version}
                       for r in objfile.references[1:]],
        "datasize": len(objfile.data),
        "symbols": symbols,
    }


def dump_yaml(objfile, with_data=False):
    return yaml.dump(to_dict(objfile, with_data), default_flow_style=False, allow_unicode=True)
