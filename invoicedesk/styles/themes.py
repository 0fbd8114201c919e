from __future__ import annotations

from invoicedesk.styles.tokens import Colors, Radius, Space


def light_qss() -> str:
    c = Colors
    r = Radius
    s = Space
    return f"""
    QWidget {{ font-size: 13px; background: {c.bg}; color: {c.text}; }}
    QMainWindow>QWidget {{ background: {c.bg}; }}
    QLabel#ViewTitle {{ font-size: 18px; font-weight: 700; color: {c.primary}; }}
    QLabel#SectionTitle {{ font-size: 14px; font-weight: 700; color: {c.subtext}; padding: 2px 2px 0 2px; }}
    QLabel#Totals {{ font-weight: 600; }}
    QLineEdit, QTextEdit, QPlainTextEdit, QDateEdit, QDoubleSpinBox, QSpinBox, QComboBox {{
        border: 1px solid {c.input_border}; border-radius: {r.sm}px; padding: {s.xs}px; background: {c.card};
    }}
    QLineEdit:focus, QTextEdit:focus, QDateEdit:focus, QDoubleSpinBox:focus, QComboBox:focus {{ border: 1px solid {c.primary}; }}
    QTableWidget {{ background: {c.card}; border: 1px solid {c.border}; gridline-color: {c.border}; }}
    QHeaderView::section {{ background: {c.nav_checked}; color: {c.primary}; padding: 4px; border: none; font-weight: 600; }}
    QPushButton {{ padding: 7px 14px; border-radius: {r.md}px; border: 1px solid {c.border}; background: {c.card}; }}
    QPushButton:hover {{ background: {c.nav_hover}; border-color: {c.input_border}; }}
    QPushButton#Primary {{ background: {c.primary}; color: white; border: none; }}
    QPushButton#Primary:hover {{ background: {c.primary_hover}; }}
    /* Nav rail */
    QWidget#NavRail {{ background: {c.card}; border-right: 1px solid {c.border}; }}
    QPushButton#NavButton {{ border:none; text-align:left; padding:8px 12px; border-radius:{r.sm}px; }}
    QPushButton#NavButton:hover {{ background:{c.nav_hover}; }}
    QPushButton#NavButton:checked {{ background:{c.nav_checked}; color:{c.primary}; font-weight:600; }}
    QStatusBar {{ background: {c.card}; border-top: 1px solid {c.border}; }}
    """


def dark_qss() -> str:
    c = Colors
    r = Radius
    s = Space
    return f"""
    QWidget {{ font-size: 13px; background: {c.bg_dark}; color: {c.text_dark}; }}
    QMainWindow>QWidget {{ background: {c.bg_dark}; }}
    QLabel#ViewTitle {{ font-size: 18px; font-weight: 700; color: {c.primary_dark}; }}
    QLabel#SectionTitle {{ font-size: 14px; font-weight: 700; color: {c.text_dark}; padding: 2px 2px 0 2px; }}
    QLabel#Totals {{ font-weight: 600; }}
    QLineEdit, QTextEdit, QPlainTextEdit, QDateEdit, QDoubleSpinBox, QSpinBox, QComboBox {{
        border: 1px solid {c.input_border_dark}; border-radius: {r.sm}px; padding: {s.xs}px; background: {c.card_dark}; color: {c.text_dark};
    }}
    QLineEdit:focus, QTextEdit:focus, QDateEdit:focus, QDoubleSpinBox:focus, QComboBox:focus {{ border: 1px solid {c.primary_dark}; }}
    QTableWidget {{ background: {c.card_dark}; border: 1px solid {c.border_dark}; gridline-color: {c.border_dark}; }}
    QHeaderView::section {{ background: {c.nav_checked_dark}; color: {c.text_dark}; padding: 4px; border: none; font-weight: 600; }}
    QPushButton {{ padding: 7px 14px; border-radius: {r.md}px; border: 1px solid {c.input_border_dark}; background: {c.card_dark}; color: {c.text_dark}; }}
    QPushButton:hover {{ background: {c.nav_hover_dark}; }}
    QPushButton#Primary {{ background: {c.primary_dark}; color: {c.bg_dark}; border: none; }}
    /* Nav rail */
    QWidget#NavRail {{ background: {c.card_dark}; border-right: 1px solid {c.border_dark}; }}
    QPushButton#NavButton {{ border:none; text-align:left; padding:8px 12px; border-radius:{r.sm}px; }}
    QPushButton#NavButton:hover {{ background:{c.nav_hover_dark}; }}
    QPushButton#NavButton:checked {{ background:{c.nav_checked_dark}; font-weight:600; }}
    QStatusBar {{ background: {c.card_dark}; border-top: 1px solid {c.border_dark}; }}
    """
