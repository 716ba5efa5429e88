import html
import json
import re
from datetime import datetime
from typing import Any

from ignitia.models import Generation

DEFAULT_ACCENT = "#000"
SWATCH_FALLBACK = "#fff"
FOOTER_BRAND = "Generated by Ignitia - AI-Powered Startup Builder"

# Only hex, keyword and rgb/hsl values reach the stylesheet.
_CSS_COLOR = re.compile(
    r"#[0-9a-fA-F]{3,8}|[a-zA-Z]+|(?:rgb|hsl)a?\([0-9.%\s,/+-]*\)"
)


def export_filename(startup_name: str | None, suffix: str) -> str:
    slug = re.sub(r"\s+", "-", (startup_name or "").strip())
    # Header values must stay printable ASCII without quotes.
    slug = re.sub(r"[^\x21-\x7e]|\"", "", slug) or "startup"
    return f"{slug}-{suffix}"


def landing_page_html(generation: Generation) -> str:
    """The stored landing page, byte for byte."""
    return generation.landing_page_html or ""


def format_created_date(value: datetime | None) -> str:
    if value is None:
        return ""
    return f"{value:%B} {value.day}, {value.year}"


def _text(value: Any) -> str:
    return "" if value is None else html.escape(str(value))


def _css_color(value: Any, fallback: str) -> str:
    if isinstance(value, str) and _CSS_COLOR.fullmatch(value.strip()):
        return value.strip()
    return fallback


def _feature_text(feature: Any) -> str:
    if isinstance(feature, dict):
        return " - ".join(_text(v) for v in feature.values() if v is not None and v != "")
    if isinstance(feature, (list, bool, int, float)):
        return _text(json.dumps(feature, ensure_ascii=False))
    return _text(feature)


def _swatch(label: str, color: Any) -> str:
    return (
        '      <div class="color-box">\n'
        f'        <div class="color-swatch" style="background-color: {_css_color(color, SWATCH_FALLBACK)};"></div>\n'
        f'        <div class="color-label">{label}<br>{_text(color)}</div>\n'
        "      </div>"
    )


def render_pitch_document(generation: Generation) -> str:
    """Print-ready one-page pitch built from a stored generation."""
    colors = generation.color_scheme if isinstance(generation.color_scheme, dict) else {}
    accent = _css_color(colors.get("primary"), DEFAULT_ACCENT)
    features = generation.key_features if isinstance(generation.key_features, list) else []
    feature_items = "".join(f"<li>{_feature_text(feature)}</li>" for feature in features)
    swatches = "\n".join(
        _swatch(label, colors.get(key))
        for label, key in (("Primary", "primary"), ("Secondary", "secondary"), ("Accent", "accent"))
    )

    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <title>{_text(generation.startup_name)} - Startup Pitch</title>
  <style>
    *{{margin:0;padding:0;box-sizing:border-box}}
    body{{font-family:-apple-system,BlinkMacSystemFont,'Segoe UI',Roboto,'Helvetica Neue',Arial,sans-serif;line-height:1.6;color:#1a1a1a;padding:60px;max-width:800px;margin:0 auto}}
    .header{{text-align:center;margin-bottom:60px;padding-bottom:30px;border-bottom:3px solid {accent}}}
    .logo{{font-size:48px;font-weight:bold;color:{accent};margin-bottom:10px}}
    .tagline{{font-size:20px;font-style:italic;color:#666;margin-top:10px}}
    .section{{margin-bottom:40px}}
    .section-title{{font-size:24px;font-weight:bold;color:{accent};margin-bottom:15px;padding-bottom:10px;border-bottom:2px solid #e0e0e0}}
    .section-content{{font-size:16px;color:#333;line-height:1.8}}
    .features-list{{list-style:none;padding-left:0}}
    .features-list li{{padding:12px 0;padding-left:30px;position:relative}}
    .features-list li:before{{content:"\\2713";position:absolute;left:0;color:{accent};font-weight:bold;font-size:20px}}
    .color-scheme{{display:flex;gap:30px;margin-top:20px}}
    .color-box{{text-align:center}}
    .color-swatch{{width:100px;height:100px;border-radius:8px;margin-bottom:10px;border:2px solid #e0e0e0}}
    .color-label{{font-size:14px;color:#666;font-weight:500}}
    .footer{{margin-top:60px;padding-top:30px;border-top:2px solid #e0e0e0;text-align:center;color:#999;font-size:14px}}
    @media print{{body{{padding:40px}}}}
  </style>
</head>
<body>
  <div class="header">
    <div class="logo">{_text(generation.startup_name)}</div>
    <div class="tagline">{_text(generation.tagline)}</div>
  </div>

  <div class="section">
    <h2 class="section-title">Executive Summary</h2>
    <p class="section-content">{_text(generation.description)}</p>
  </div>

  <div class="section">
    <h2 class="section-title">Target Audience</h2>
    <p class="section-content">{_text(generation.target_audience)}</p>
  </div>

  <div class="section">
    <h2 class="section-title">Key Features</h2>
    <ul class="features-list">
      {feature_items}
    </ul>
  </div>

  <div class="section">
    <h2 class="section-title">Brand Colors</h2>
    <div class="color-scheme">
{swatches}
    </div>
  </div>

  <div class="footer">
    {FOOTER_BRAND}<br>
    {format_created_date(generation.created_at)}
  </div>
</body>
</html>
"""
