"""
Calendar helpers for shifting forecast dates by whole years and months.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import calendar
from datetime import date, datetime


def as_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def add_years(value: date, years: int) -> date:
    value = as_date(value)
    try:
        return value.replace(year=value.year + years)
    except ValueError:
        # 29 February in a non-leap target year rolls over to 1 March
        return date(value.year + years, 3, 1)


def add_months(value: date, months: int) -> date:
    value = as_date(value)
    index = value.month - 1 + months
    year = value.year + index // 12
    month = index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def iso(value: date) -> str:
    return as_date(value).isoformat()
