# SPDX-License-Identifier: MIT

from rich.markup import escape


def project_totals_line(project_totals: list[tuple[str, int]]) -> str:
    totals = "  ".join(f"{escape(title)} ({count})" for title, count in project_totals)
    return f"[dim]Projects: {totals}[/dim]"
