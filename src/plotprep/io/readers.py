from pathlib import Path
import json
import pandas as pd
import pyreadr

RDATA_SUFFIXES = (".rdata", ".rda", ".rds")


def _ensure_exists(path: Path):
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"file not found: {p}")

def read_rdata(path: Path, key: str | None = None) -> pd.DataFrame:
    """
    Read one data frame out of an .RData/.rda/.rds file.

    .rds files hold a single unnamed object; for .RData files `key` picks the
    object, and may be omitted when the file holds exactly one.
    """
    _ensure_exists(path)
    res = pyreadr.read_r(str(path))
    if key is None:
        if len(res) != 1:
            raise KeyError(f"{path} holds {len(res)} objects {sorted(k for k in res if k)}; pass key=")
        return next(iter(res.values()))
    if key not in res:
        raise KeyError(f"object '{key}' not found in {path}; available: {sorted(k for k in res if k)}")
    return res[key]

def read_json(path: Path):
    _ensure_exists(path)
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)

def read_parquet(path: Path) -> pd.DataFrame:
    _ensure_exists(path)
    return pd.read_parquet(path)

def read_csv(path: Path, **kwargs) -> pd.DataFrame:
    _ensure_exists(path)
    return pd.read_csv(path, encoding="utf-8", **kwargs)

def read_table(path: Path, **kwargs) -> pd.DataFrame:
    """Read a tabular file, picking the reader from the file suffix."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return read_csv(path, **kwargs)
    if suffix in (".parquet", ".pq"):
        return read_parquet(path)
    if suffix in RDATA_SUFFIXES:
        return read_rdata(path, **kwargs)
    if suffix == ".json":
        return pd.DataFrame(read_json(path))
    raise ValueError(f"unsupported table format '{path.suffix}' for {path}")
