"""Search analytics over the search log table.

Loads the log with pandas and reduces it to the numbers the back-office
cares about: how much people search, how often they find nothing, and
what they search for.
"""

from typing import Any, Dict, List

import pandas as pd

from catalog.config import TOP_QUERIES_LIMIT
from catalog.db import DEFAULT_DB_PATH, get_connection

__all__ = ["load_search_logs", "summarize_search_logs"]


def load_search_logs(db_path: str = DEFAULT_DB_PATH) -> pd.DataFrame:
    """Load the search log as a DataFrame (one row per committed search)."""
    query = "SELECT id, search_query, results_count, created_at FROM search_logs ORDER BY id"
    with get_connection(db_path) as conn:
        df = pd.read_sql_query(query, conn)

    if not df.empty:
        df["created_at"] = pd.to_datetime(df["created_at"])
        df["normalized_query"] = df["search_query"].str.strip().str.lower()
    return df


def _top_queries(df: pd.DataFrame, top_n: int) -> List[Dict[str, Any]]:
    if df.empty:
        return []
    counts = (
        df.groupby("normalized_query")
        .size()
        .reset_index(name="searches")
        .sort_values(["searches", "normalized_query"], ascending=[False, True])
        .head(top_n)
    )
    return [
        {"query": row.normalized_query, "count": int(row.searches)}
        for row in counts.itertuples(index=False)
    ]


def summarize_search_logs(
    db_path: str = DEFAULT_DB_PATH,
    top_n: int = TOP_QUERIES_LIMIT,
) -> Dict[str, Any]:
    """Summarize the search log.

    Queries are grouped case-insensitively after trimming, so "Dell" and
    " dell" count as the same search.

    Returns:
        Dict with total_searches, zero_result_searches, zero_result_rate,
        top_queries and top_zero_result_queries.
    """
    df = load_search_logs(db_path)
    if df.empty:
        return {
            "total_searches": 0,
            "zero_result_searches": 0,
            "zero_result_rate": 0.0,
            "top_queries": [],
            "top_zero_result_queries": [],
        }

    zero = df[df["results_count"] == 0]
    return {
        "total_searches": int(len(df)),
        "zero_result_searches": int(len(zero)),
        "zero_result_rate": round(len(zero) / len(df), 3),
        "top_queries": _top_queries(df, top_n),
        "top_zero_result_queries": _top_queries(zero, top_n),
    }
