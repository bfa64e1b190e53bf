from pathlib import Path
import pandas as pd

def atomic_write_parquet(df: pd.DataFrame, out: Path) -> None:
    out.parent.mkdir(parents=True, exist_ok=True)
    tmp = out.with_suffix(out.suffix + ".tmp")
    df.to_parquet(tmp)
    tmp.replace(out)             # atomic replace on same filesystem

def atomic_write_csv(df: pd.DataFrame, out: Path) -> None:
    out.parent.mkdir(parents=True, exist_ok=True)
    tmp = out.with_suffix(out.suffix + ".tmp")
    df.to_csv(tmp, index=False, encoding="utf-8")
    tmp.replace(out)

def write_table(df: pd.DataFrame, out: Path) -> Path:
    out = Path(out)
    suffix = out.suffix.lower()
    if suffix == ".csv":
        atomic_write_csv(df, out)
    elif suffix in (".parquet", ".pq"):
        atomic_write_parquet(df, out)
    else:
        raise ValueError(f"unsupported output format '{out.suffix}' for {out}")
    return out
