from __future__ import annotations
import logging
import os
from pathlib import Path

import pandas as pd
from shiny import App, ui, render, reactive

from naming.person_name import PersonName, Possessive
from services.export import digest_by_last_name, to_csv_bytes
from services.logging_config import setup_logging
from services.roster import FormatOptions, format_name, format_roster, load_roster

setup_logging(os.getenv("NAMING_LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

def _read_upload(uf) -> bytes:
    """Accept Shiny FileInfo or a plain dict and return bytes."""
    # Newer Shiny: FileInfo object with .read()
    if hasattr(uf, "read"):
        return uf.read()
    # Older/bare: dict with a temp file path
    if isinstance(uf, dict):
        for key in ("datapath", "path"):
            p = uf.get(key)
            if p and os.path.exists(p):
                with open(p, "rb") as f:
                    return f.read()
    raise TypeError(f"Unsupported upload object: {type(uf)!r}")

APP_DIR = Path(__file__).parent.resolve()
STATIC_DIR = APP_DIR / "www"

app_title = "Person Name Formatter"

POSSESSIVE_CHOICES = {m.value: m.value.capitalize() for m in Possessive}

page = ui.page_navbar(
    ui.nav_panel("Single name", ui.layout_columns(
        ui.card(
            ui.h3(app_title, class_='card-title'),
            ui.input_text("full_name", "Full name", placeholder="Will St. Clair", width="100%"),
            ui.input_select("possessive_mode", "Possessive of", choices=POSSESSIVE_CHOICES, selected=Possessive.FULL.value),
            ui.input_checkbox("single_proper", "Proper-case first", value=False),
        ),
        ui.card(
            ui.h4("Formats", class_='card-title'),
            ui.output_table("tbl_single"),
        ),
        col_widths=(4, 8)
    )),
    ui.nav_panel("Roster", ui.layout_columns(
        ui.card(
            ui.h4("Roster", class_='card-title'),
            ui.p("Upload a roster (CSV or XLSX) with a name column, or first/last columns."),
            ui.input_file("roster_file", "Roster (CSV or XLSX)", multiple=False, accept=[".csv", ".xlsx"], width="100%"),
            ui.input_select("roster_possessive", "Possessive of", choices=POSSESSIVE_CHOICES, selected=Possessive.FULL.value),
            ui.input_checkbox("roster_proper", "Proper-case names", value=False),
            ui.input_checkbox("ascii_handles", "ASCII-only handles", value=False),
            ui.input_checkbox("digest_only", "Digest columns only", value=False),
            ui.input_action_button("format", "Format roster", class_="btn-primary"),
            ui.download_button("download", "Download CSV"),
            ui.output_text("status_text"),
        ),
        ui.card(
            ui.h4("Formatted names", class_='card-title'),
            ui.output_table("tbl_roster"),
        ),
        col_widths=(3, 9)
    )),
    ui.nav_panel("About", ui.layout_columns(
        ui.card(
            ui.h4("About this tool", class_='card-title'),
            ui.markdown("Splits full names into first and last parts and renders them as full, familiar, abbreviated, sorted, initials, possessive, @-mention handle and proper-cased forms."),
        ),
        col_widths=(12,)
    )),
    title=app_title,
)

def server(input, output, session):
    formatted_df = reactive.value(pd.DataFrame())
    status_txt = reactive.value("Awaiting roster.")

    @render.table
    def tbl_single():
        name = PersonName.make(input.full_name())
        if name is None:
            return pd.DataFrame(columns=["format", "value"])
        opts = FormatOptions(possessive=Possessive(input.possessive_mode()), proper=input.single_proper())
        row = format_name(name, opts)
        return pd.DataFrame({"format": list(row), "value": list(row.values())})

    @reactive.effect
    @reactive.event(input.format)
    def _do_format():
        try:
            status_txt.set("Reading roster…")
            rfile = input.roster_file()
            if not rfile:
                status_txt.set("No roster selected.")
                formatted_df.set(pd.DataFrame())
                return
            roster = load_roster(_read_upload(rfile[0]))
            opts = FormatOptions(
                possessive=Possessive(input.roster_possessive()),
                proper=input.roster_proper(),
                ascii_handles=input.ascii_handles(),
            )
            formatted = format_roster(roster, opts)
            formatted_df.set(formatted)
            status_txt.set(f"Done. Rows: {len(roster)} | Names formatted: {len(formatted)}")
        except Exception as e:
            # Surface the error to the UI and keep the app alive
            logger.exception("Roster formatting failed")
            status_txt.set(f"⚠️ Error: {type(e).__name__}: {e}")
            formatted_df.set(pd.DataFrame())

    def _current() -> pd.DataFrame:
        df = formatted_df()
        if df.empty or not input.digest_only():
            return df
        return digest_by_last_name(df)

    @render.text
    def status_text():
        return status_txt()

    @render.table
    def tbl_roster():
        return _current()

    @render.download(filename="formatted_names.csv")
    def download():
        yield to_csv_bytes(_current())

app = App(page, server, static_assets=str(STATIC_DIR) if STATIC_DIR.exists() else None)
