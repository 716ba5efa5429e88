from typing import Any

from ignitia.core.errors import InvalidInput

STARTUP_FIELDS = (
    "startupName",
    "tagline",
    "description",
    "targetAudience",
    "keyFeatures",
    "colorScheme",
    "landingPageHtml",
)

STARTUP_PROMPT_TEMPLATE = """
Create a professional startup landing page for: "{idea}"

Return ONLY valid JSON (no markdown, no code blocks):
{{
  "startupName": "Name",
  "tagline": "Tagline",
  "description": "Description",
  "targetAudience": "Audience",
  "keyFeatures": ["feature1", "feature2", "feature3", "feature4", "feature5"],
  "colorScheme": {{"primary": "#3b82f6", "secondary": "#1f2937", "accent": "#ef4444", "background": "#ffffff", "text": "#111827"}},
  "landingPageHtml": "Complete HTML"
}}

The colorScheme object must contain primary, secondary and accent; background and text are optional.

For landingPageHtml, generate complete, valid HTML5 with:

1. Full structure: <!DOCTYPE html><html><head>...</head><body>...</body></html>
2. Responsive navigation bar with a mobile hamburger menu that toggles a dropdown
3. Hero section with headline, description, and CTA buttons
4. Features section with 6 cards in a grid layout
5. How it works section with 4 numbered process steps
6. Pricing section with 3 pricing tiers
7. Contact/CTA section
8. Footer with links

Design requirements:
- Use the provided color scheme (primary, secondary, accent)
- Clean, minimal design with proper spacing
- Responsive: works on mobile, tablet, desktop
- Smooth scroll navigation when clicking navbar links
- Mobile menu dropdown with smooth animation
- All sections have proper IDs for linking
- Professional typography and spacing
- Subtle shadows and hover effects
- All content is visible and readable

Include complete CSS in a <style> tag and JavaScript in a <script> tag for:
- Mobile menu toggle functionality
- Smooth scroll to sections
- Responsive design

Return ONLY the JSON object.
""".strip()


def build_startup_prompt(idea: Any) -> str:
    """Embed the user's idea verbatim into the landing-page instruction template."""
    if not isinstance(idea, str) or not idea.strip():
        raise InvalidInput("Invalid idea input")
    return STARTUP_PROMPT_TEMPLATE.format(idea=idea)
