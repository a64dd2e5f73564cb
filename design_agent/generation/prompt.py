from typing import Any

def build_prompt(project: dict[str, Any], content: dict[str, Any] | None) -> str:
    brand = project.get("brand_elements") or {}
    content = content or {}
    colors = ", ".join(brand.get("colorPalette") or []) or "default"
    fonts = ", ".join(brand.get("fonts") or []) or "modern"

    return (
        f"Create a professional {project.get('design_type') or 'social_media'} design.\n"
        f"Colors: {colors}\n"
        f"Fonts: {fonts}\n"
        f"Title: {content.get('title') or ''}\n"
        f"Copy: {content.get('copy') or ''}\n"
        f"Description: {content.get('description') or ''}\n"
        f"CTA: {content.get('cta') or ''}\n"
        f"Footer: {content.get('footerContent') or ''}\n"
        "Make it modern, professional, and visually appealing."
    )
