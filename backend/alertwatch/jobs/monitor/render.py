from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from jinja2 import Environment, select_autoescape

from alertwatch.jobs.monitor.types import AlertChange, NormalizedAlert
from alertwatch.periods.types import AtomicPeriod

PAGE_TEMPLATE = """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{{ title }}</title>
</head>
<body>
  <h1>{{ title }}</h1>
  <p class="generated">Updated {{ generated_at | human_dt }}</p>
  {% if not alerts %}
  <p class="empty">No matching alerts right now.</p>
  {% endif %}
  {% for alert in alerts %}
  <section class="alert">
    <h2>{{ alert.header }}</h2>
    {% for alert_id in alert.alert_ids %}
    {% set change = changes.get(alert_id) %}
    {% if change and change.status != "unchanged" %}
    <span class="badge {{ change.status }}">{{ change.status }}</span>
    {% endif %}
    {% endfor %}
    <ul class="periods">
      {% for period in alert.atomic_periods %}
      <li{% if period.is_degenerate %} class="raw"{% endif %}>{{ period | period_label }}</li>
      {% endfor %}
    </ul>
    {% if alert.raw_periods %}
    <details>
      <summary>As published</summary>
      {% for raw in alert.raw_periods %}<p>{{ raw }}</p>{% endfor %}
    </details>
    {% endif %}
  </section>
  {% endfor %}
  {% if removed %}
  <section class="removed">
    <h2>No longer listed</h2>
    <ul>
      {% for change in removed %}<li>{{ change.previous_header or change.alert_id }}</li>{% endfor %}
    </ul>
  </section>
  {% endif %}
</body>
</html>
"""


def human_dt(value: datetime) -> str:
    """datetime -> "Sat, Feb 22 12:15 AM" (no zero-padded hour)."""
    hour12 = value.hour % 12 or 12
    marker = "AM" if value.hour < 12 else "PM"
    return f"{value:%a, %b} {value.day} {hour12}:{value:%M} {marker}"


def period_label(period: AtomicPeriod) -> str:
    if period.is_degenerate:
        return period.start_text()
    return f"{human_dt(period.start)} – {human_dt(period.end)}"


def _environment() -> Environment:
    env = Environment(autoescape=select_autoescape(default_for_string=True))
    env.filters["human_dt"] = human_dt
    env.filters["period_label"] = period_label
    return env


def render_page(
    alerts: Iterable[NormalizedAlert],
    *,
    changes: Iterable[AlertChange] = (),
    title: str = "Service alerts",
    generated_at: Optional[datetime] = None,
) -> str:
    changes = list(changes)
    template = _environment().from_string(PAGE_TEMPLATE)
    return template.render(
        title=title,
        alerts=list(alerts),
        changes={c.alert_id: c for c in changes if c.status != "removed"},
        removed=[c for c in changes if c.status == "removed"],
        generated_at=generated_at or datetime.now(),
    )


def write_page(path: str | Path, html: str) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")
    return path
