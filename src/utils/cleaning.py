"""Advisor data loading and cleaning helpers."""
import logging
import re
from pathlib import Path
from typing import Any, Dict, List

import numpy as np
import pandas as pd
import streamlit as st

from .io_utils import format_phone_number

logger = logging.getLogger(__name__)

STATE_MAPPING = {
    "ALABAMA": "AL",
    "ALASKA": "AK",
    "ARIZONA": "AZ",
    "ARKANSAS": "AR",
    "CALIFORNIA": "CA",
    "COLORADO": "CO",
    "CONNECTICUT": "CT",
    "DELAWARE": "DE",
    "FLORIDA": "FL",
    "GEORGIA": "GA",
    "HAWAII": "HI",
    "IDAHO": "ID",
    "ILLINOIS": "IL",
    "INDIANA": "IN",
    "IOWA": "IA",
    "KANSAS": "KS",
    "KENTUCKY": "KY",
    "LOUISIANA": "LA",
    "MAINE": "ME",
    "MARYLAND": "MD",
    "MASSACHUSETTS": "MA",
    "MICHIGAN": "MI",
    "MINNESOTA": "MN",
    "MISSISSIPPI": "MS",
    "MISSOURI": "MO",
    "MONTANA": "MT",
    "NEBRASKA": "NE",
    "NEVADA": "NV",
    "NEW HAMPSHIRE": "NH",
    "NEW JERSEY": "NJ",
    "NEW MEXICO": "NM",
    "NEW YORK": "NY",
    "NORTH CAROLINA": "NC",
    "NORTH DAKOTA": "ND",
    "OHIO": "OH",
    "OKLAHOMA": "OK",
    "OREGON": "OR",
    "PENNSYLVANIA": "PA",
    "RHODE ISLAND": "RI",
    "SOUTH CAROLINA": "SC",
    "SOUTH DAKOTA": "SD",
    "TENNESSEE": "TN",
    "TEXAS": "TX",
    "UTAH": "UT",
    "VERMONT": "VT",
    "VIRGINIA": "VA",
    "WASHINGTON": "WA",
    "WEST VIRGINIA": "WV",
    "WISCONSIN": "WI",
    "WYOMING": "WY",
    "DISTRICT OF COLUMBIA": "DC",
}


def normalize_column_name(name: str) -> str:
    """'Principal Office City' -> 'principal_office_city'; camelCase like 'averageRating' is left alone."""
    name = str(name).strip()
    if " " not in name and "-" not in name:
        return name.lower() if name[:1].isupper() else name
    return re.sub(r"[^0-9a-zA-Z]+", "_", name).strip("_").lower()


@st.cache_data(ttl=3600)
def load_advisor_data(filepath: str) -> pd.DataFrame:
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"File {filepath} does not exist")

    suffix = path.suffix.lower()
    if suffix == ".csv":
        df = pd.read_csv(path)
    elif suffix == ".xlsx":
        df = pd.read_excel(path)
    elif suffix == ".feather":
        df = pd.read_feather(path)
    elif suffix == ".parquet":
        df = pd.read_parquet(path)
    else:
        raise ValueError(f"Unsupported file type: {suffix}")

    df.columns = [normalize_column_name(col) for col in df.columns]
    logger.info(f"Loaded {len(df)} advisors from {path.name}")

    df = clean_coordinates(df)
    df = clean_address_data(df)
    df = build_location_label(df)
    if "principal_office_telephone_number" in df.columns:
        df["principal_office_telephone_number"] = df["principal_office_telephone_number"].apply(format_phone_number)
    return df


def clean_address_data(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    for col in ("principal_office_city", "principal_office_state", "principal_office_postal_code"):
        if col in df.columns:
            df[col] = df[col].astype(str).str.strip()
            df[col] = df[col].replace(["nan", "None", "NaN", ""], pd.NA).fillna("")

    if "principal_office_state" in df.columns:
        states = df["principal_office_state"].str.upper()
        df["principal_office_state"] = states.map(STATE_MAPPING).fillna(states)

    return df


def build_location_label(df: pd.DataFrame) -> pd.DataFrame:
    """Fill ``location`` with "City, ST" where it is empty."""
    df = df.copy()

    def _construct(row):
        parts = []
        for c in ("principal_office_city", "principal_office_state"):
            if c in row and pd.notna(row[c]) and str(row[c]).strip():
                parts.append(str(row[c]).strip())
        return ", ".join(parts)

    constructed = df.apply(_construct, axis=1) if not df.empty else pd.Series([], dtype=str)

    if "location" in df.columns:
        current = df["location"].fillna("").astype(str).str.strip()
        empty_mask = current.isin(["", "nan", "None", "NaN"])
        df["location"] = current
        df.loc[empty_mask, "location"] = constructed.loc[empty_mask]
    else:
        df["location"] = constructed

    return df


def clean_coordinates(df: pd.DataFrame) -> pd.DataFrame:
    """Coerce coordinates to floats.

    Blank or unparseable values become NaN, never 0: (0, 0) is a real point
    and would otherwise pass the radius filter for searches near it.
    """
    if df.empty:
        return df

    df = df.copy()
    for col in ("latitude", "longitude"):
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce")
        else:
            df[col] = np.nan

    out_of_range = (df["latitude"].abs() > 90) | (df["longitude"].abs() > 180)
    if out_of_range.any():
        logger.warning(
            "%d advisors have out-of-range coordinates; they will be excluded from distance filtering",
            int(out_of_range.sum()),
        )
        df.loc[out_of_range, ["latitude", "longitude"]] = np.nan

    return df


def advisors_to_records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """Rows as plain dicts with missing values as None."""
    if df.empty:
        return []
    cleaned = df.astype(object).where(pd.notna(df), None)
    return cleaned.to_dict(orient="records")


def validate_advisor_data(df: pd.DataFrame) -> tuple[bool, str]:
    if df.empty:
        return False, "❌ **Error**: No advisor data available. Please check data files."

    issues = []
    info = []

    required_cols = ["crd_number", "primary_business_name"]
    missing_cols = [col for col in required_cols if col not in df.columns]
    if missing_cols:
        issues.append(f"Missing required columns: {', '.join(missing_cols)}")

    if "latitude" in df.columns and "longitude" in df.columns:
        missing_coords = int((df["latitude"].isna() | df["longitude"].isna()).sum())
        if missing_coords > 0:
            info.append(f"{missing_coords} advisors missing coordinates (excluded from distance searches)")
    else:
        info.append("Geographic columns missing (distance search unavailable)")

    if "crd_number" in df.columns:
        duplicates = int(df["crd_number"].dropna().duplicated().sum())
        if duplicates > 0:
            issues.append(f"{duplicates} duplicate CRD numbers")

    info.append(f"Total advisors in directory: {len(df)}")

    message_parts = []
    if issues:
        message_parts.append("⚠️ **Data Quality Issues**: " + "; ".join(issues))
    if info:
        message_parts.append("ℹ️ **Data Summary**: " + "; ".join(info))

    is_valid = len(issues) == 0
    message = "\n\n".join(message_parts)
    return is_valid, message
