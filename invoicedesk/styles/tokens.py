from __future__ import annotations

"""Design tokens for the InvoiceDesk UI.

- Spacing scale uses 4px multiples.
- Status colors are shared by the invoice list badges in both themes.
"""


class Colors:
    # Light
    bg = "#f6f8fc"
    card = "#ffffff"
    text = "#1d2433"
    subtext = "#4a5568"
    border = "#dfe4ee"
    input_border = "#c8cfdc"
    primary = "#1f3a68"
    primary_hover = "#2b4d86"
    nav_hover = "#eef2fa"
    nav_checked = "#e1e8f6"

    # Dark
    bg_dark = "#1e2230"
    card_dark = "#262b3b"
    text_dark = "#eef1f7"
    border_dark = "#363c50"
    input_border_dark = "#4b526a"
    primary_dark = "#8aa8e6"
    nav_hover_dark = "#303750"
    nav_checked_dark = "#39426a"


class StatusColors:
    paid = "#2f855a"
    unpaid = "#b7791f"
    partial = "#2b6cb0"
    cancelled = "#718096"


class Radius:
    sm = 6
    md = 10


class Space:
    xs = 4
    sm = 8
    md = 12
    lg = 16
