# config/resolvers.py
from pathlib import Path
from typing import Optional, Sequence, Tuple, List
from platformdirs import user_log_dir

APP = "quoterank"
REQUEST_EXTENSIONS = (".json",)

def default_log_dir() -> Path:
    p = Path(user_log_dir(APP))
    p.mkdir(parents=True, exist_ok=True)
    return p

def resolve_log_dir(log_dir: Optional[Path]) -> Path:
    """Explicit --log-dir if given, else the per-user log directory."""
    if log_dir:
        p = Path(log_dir)
        p.mkdir(parents=True, exist_ok=True)
        return p
    return default_log_dir()

def result_path_for(
    request_path: str,
    output_dir: Path,
    extension: str,
    input_root: Optional[Path] = None,
) -> Path:
    """``rfq-17.json`` -> ``<output_dir>/rfq-17.scores.<extension>``.

    Under ``input_root`` the relative directories are folded into the name, so
    ``<input_root>/a/rfq.json`` -> ``a__rfq.scores.<extension>``.
    """
    p = Path(request_path)
    name = p.stem
    if input_root is not None:
        try:
            rel = p.resolve().relative_to(Path(input_root).resolve())
        except ValueError:
            rel = None
        if rel is not None:
            name = "__".join(rel.parent.parts + (p.stem,))
    return Path(output_dir) / f"{name}.scores.{extension}"

def resolve_request_files(
    inputs: Optional[Sequence[str]],
    input_dir: Optional[str],
    recursive: bool = False,
) -> Tuple[str, ...]:
    if inputs and input_dir:
        raise ValueError("Specify either explicit request files or input_dir, not both.")

    if input_dir:
        base = Path(input_dir)
        if not base.is_dir():
            raise ValueError(f"--input-dir is not a directory: {base}")
        pattern = "**/*" if recursive else "*"
        found: List[Path] = []
        for p in base.glob(pattern):
            if p.is_file() and p.suffix.lower() in REQUEST_EXTENSIONS:
                found.append(p.resolve())
        files = tuple(sorted({str(p) for p in found}))
        if not files:
            rec = " recursively" if recursive else ""
            exts = ", ".join(REQUEST_EXTENSIONS)
            raise ValueError(f"No files with extensions ({exts}) found in {base}{rec}.")
        return files

    if inputs:
        files = []
        for item in inputs:
            p = Path(item)
            if not p.is_file():
                raise ValueError(f"Request file not found: {item}")
            if p.suffix.lower() not in REQUEST_EXTENSIONS:
                raise ValueError(f"Unsupported request extension for {item} (allowed: {REQUEST_EXTENSIONS})")
            files.append(str(p.resolve()))
        # stable & unique
        return tuple(sorted(set(files)))

    raise ValueError("No inputs provided. Use inputs=... or input_dir=...")
