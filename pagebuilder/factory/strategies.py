"""Default creation strategies, one per element kind.

Defaults are expressed as `default`-breakpoint declarations; the factory
compiles them to utility classes. Colors reference theme custom properties
with a literal fallback.
"""

from pagebuilder.model import Element
from pagebuilder.schema import ElementType

from .lib import BuilderState, build_element, register_strategy

SUBTLE_BORDER = "1px solid rgba(15,23,42,0.06)"
INPUT_BORDER = "1px solid rgba(15,23,42,0.08)"
SURFACE = "var(--bg-surface, #ffffff)"

_CHOICE_STYLES = {
    "default": {
        "display": "inline-flex",
        "alignItems": "center",
        "gap": "8px",
        "cursor": "pointer",
        "fontSize": "14px",
        "color": "var(--text-primary, #1e293b)",
    }
}


def _choice_settings(label: str) -> dict:
    return {
        "name": "",
        "checked": False,
        "defaultChecked": False,
        "required": False,
        "disabled": False,
        "value": "",
        "label": label,
    }


# =============================================================================
# Inline / Leaf
# =============================================================================


@register_strategy(ElementType.TEXT)
def build_text(state: BuilderState) -> Element:
    return build_element(state, content="Text")


@register_strategy(ElementType.SPAN)
def build_span(state: BuilderState) -> Element:
    return build_element(
        state,
        content="Span text",
        styles={"default": {"display": "inline"}},
    )


@register_strategy(ElementType.HEADING)
def build_heading(state: BuilderState) -> Element:
    return build_element(
        state,
        content="Heading",
        settings={"level": 2},
        styles={
            "default": {
                "fontSize": "24px",
                "fontWeight": "700",
                "lineHeight": "1.3",
                "color": "var(--text-heading, #0f172a)",
            }
        },
    )


@register_strategy(ElementType.LABEL)
def build_label(state: BuilderState) -> Element:
    return build_element(
        state,
        content="Label",
        settings={"htmlFor": ""},
        styles={
            "default": {
                "fontSize": "14px",
                "fontWeight": "500",
                "color": "var(--text-label, #374151)",
                "display": "inline-block",
                "marginBottom": "4px",
            }
        },
    )


@register_strategy(ElementType.BLOCKQUOTE)
def build_blockquote(state: BuilderState) -> Element:
    return build_element(
        state,
        content="Blockquote text goes here...",
        settings={"cite": ""},
        styles={
            "default": {
                "borderLeft": "4px solid var(--color-primary, #2563eb)",
                "padding": "12px 20px",
                "margin": "16px 0",
                "backgroundColor": "var(--bg-muted, #f8fafc)",
                "fontStyle": "italic",
                "fontSize": "16px",
                "lineHeight": "1.6",
                "color": "var(--text-secondary, #475569)",
                "borderRadius": "0 8px 8px 0",
            }
        },
    )


@register_strategy(ElementType.CODE)
def build_code(state: BuilderState) -> Element:
    return build_element(
        state,
        content="// Your code here\nconsole.log('Hello, world!');",
        settings={"language": "javascript", "preformatted": True},
        styles={
            "default": {
                "fontFamily": "'Fira Code', 'Cascadia Code', 'JetBrains Mono', monospace",
                "fontSize": "13px",
                "lineHeight": "1.6",
                "backgroundColor": "var(--bg-code, #1e293b)",
                "color": "var(--text-code, #e2e8f0)",
                "padding": "16px 20px",
                "borderRadius": "8px",
                "overflow": "auto",
                "whiteSpace": "pre",
                "tabSize": 2,
            }
        },
    )


@register_strategy(ElementType.SEPARATOR)
def build_separator(state: BuilderState) -> Element:
    return build_element(
        state,
        styles={
            "default": {
                "width": "100%",
                "height": "1px",
                "backgroundColor": "var(--border-color, #e2e8f0)",
                "border": "none",
                "margin": "16px 0",
            }
        },
    )


@register_strategy(ElementType.ICON)
def build_icon(state: BuilderState) -> Element:
    return build_element(
        state,
        settings={
            "iconName": "star",
            "size": 24,
            "strokeWidth": 2,
            "color": "currentColor",
            "fill": "none",
            "absoluteStrokeWidth": False,
        },
        styles={
            "default": {
                "display": "inline-flex",
                "alignItems": "center",
                "justifyContent": "center",
                "color": "var(--text-primary, #1e293b)",
            }
        },
    )


# =============================================================================
# Media
# =============================================================================


@register_strategy(ElementType.IMAGE)
def build_image(state: BuilderState) -> Element:
    return build_element(
        state,
        content="Image",
        settings={"objectFit": "cover", "loading": "lazy", "decoding": "async"},
        styles={
            "default": {
                "width": "100%",
                "height": "auto",
                "borderRadius": "8px",
                "backgroundColor": "transparent",
            }
        },
    )


@register_strategy(ElementType.VIDEO)
def build_video(state: BuilderState) -> Element:
    return build_element(
        state,
        content="Video",
        settings={
            "controls": True,
            "autoplay": False,
            "loop": False,
            "muted": False,
            "preload": "metadata",
            "playsInline": True,
            "objectFit": "contain",
        },
        styles={
            "default": {
                "width": "100%",
                "height": "auto",
                "minHeight": "200px",
                "borderRadius": "8px",
                "backgroundColor": "var(--bg-surface, #000000)",
            }
        },
    )


@register_strategy(ElementType.AUDIO)
def build_audio(state: BuilderState) -> Element:
    return build_element(
        state,
        content="Audio",
        settings={
            "controls": True,
            "autoplay": False,
            "loop": False,
            "muted": False,
            "preload": "metadata",
        },
        styles={
            "default": {"width": "100%", "height": "54px", "borderRadius": "28px"}
        },
    )


@register_strategy(ElementType.IFRAME)
def build_iframe(state: BuilderState) -> Element:
    return build_element(
        state,
        content="Embedded content",
        settings={
            "sandbox": "allow-scripts allow-same-origin",
            "loading": "lazy",
            "width": "100%",
            "height": 400,
        },
        styles={
            "default": {
                "width": "100%",
                "height": "400px",
                "border": SUBTLE_BORDER,
                "borderRadius": "8px",
                "backgroundColor": SURFACE,
            }
        },
    )


# =============================================================================
# Interactive
# =============================================================================


@register_strategy(ElementType.LINK)
def build_link(state: BuilderState) -> Element:
    return build_element(
        state,
        content="Link",
        href="#",
        settings={"target": "_self"},
        styles={
            "default": {
                "color": "var(--color-primary, #2563eb)",
                "textDecoration": "underline",
                "cursor": "pointer",
            }
        },
    )


@register_strategy(ElementType.BUTTON)
def build_button(state: BuilderState) -> Element:
    return build_element(
        state,
        content="Click me",
        styles={
            "default": {
                "minWidth": "96px",
                "height": "44px",
                "backgroundColor": "var(--color-primary, #2563eb)",
                "color": "var(--color-on-primary, #ffffff)",
                "border": "none",
                "borderRadius": "10px",
                "padding": "10px 18px",
                "cursor": "pointer",
                "fontSize": "15px",
                "fontWeight": "600",
                "display": "inline-flex",
                "alignItems": "center",
                "justifyContent": "center",
            }
        },
    )


# =============================================================================
# Form
# =============================================================================


@register_strategy(ElementType.INPUT)
def build_input(state: BuilderState) -> Element:
    return build_element(
        state,
        settings={"type": "text", "placeholder": "Enter text..."},
        styles={
            "default": {
                "width": "100%",
                "height": "44px",
                "padding": "10px 14px",
                "border": INPUT_BORDER,
                "borderRadius": "8px",
                "fontSize": "15px",
                "backgroundColor": "var(--bg-input, #ffffff)",
            }
        },
    )


@register_strategy(ElementType.TEXTAREA)
def build_textarea(state: BuilderState) -> Element:
    return build_element(
        state,
        settings={"placeholder": "Enter text...", "rows": 4, "resize": "vertical"},
        styles={
            "default": {
                "width": "100%",
                "minHeight": "100px",
                "padding": "10px 14px",
                "border": INPUT_BORDER,
                "borderRadius": "8px",
                "fontSize": "15px",
                "backgroundColor": "var(--bg-input, #ffffff)",
                "resize": "vertical",
                "fontFamily": "inherit",
            }
        },
    )


@register_strategy(ElementType.CHECKBOX)
def build_checkbox(state: BuilderState) -> Element:
    return build_element(
        state,
        content="Checkbox label",
        settings=_choice_settings("Checkbox label"),
        styles=_CHOICE_STYLES,
    )


@register_strategy(ElementType.RADIO)
def build_radio(state: BuilderState) -> Element:
    return build_element(
        state,
        content="Radio label",
        settings=_choice_settings("Radio label"),
        styles=_CHOICE_STYLES,
    )


@register_strategy(ElementType.PROGRESS)
def build_progress(state: BuilderState) -> Element:
    return build_element(
        state,
        settings={"value": 50, "max": 100, "indeterminate": False, "label": "Progress"},
        styles={
            "default": {
                "width": "100%",
                "height": "8px",
                "borderRadius": "9999px",
                "backgroundColor": "var(--bg-muted, #e2e8f0)",
                "overflow": "hidden",
            }
        },
    )


@register_strategy(ElementType.SELECT)
def build_select(state: BuilderState) -> Element:
    return build_element(
        state,
        settings={"options": []},
        styles={
            "default": {
                "width": "100%",
                "height": "44px",
                "padding": "10px 12px",
                "border": SUBTLE_BORDER,
                "borderRadius": "8px",
                "fontSize": "15px",
                "backgroundColor": "var(--bg-input, #ffffff)",
                "cursor": "pointer",
            }
        },
    )


@register_strategy(ElementType.LIST)
def build_list(state: BuilderState) -> Element:
    return build_element(
        state,
        styles={
            "default": {
                "width": "100%",
                "minHeight": "160px",
                "backgroundColor": SURFACE,
                "border": SUBTLE_BORDER,
                "borderRadius": "8px",
                "padding": "12px",
            }
        },
    )


@register_strategy(ElementType.FORM)
def build_form(state: BuilderState) -> Element:
    return build_element(
        state,
        settings={
            "method": "post",
            "action": "",
            "autoComplete": "on",
            "encType": "application/x-www-form-urlencoded",
            "target": "_self",
            "validateOnSubmit": False,
            "redirectUrl": "",
        },
        styles={
            "default": {
                "width": "100%",
                "backgroundColor": SURFACE,
                "border": SUBTLE_BORDER,
                "borderRadius": "12px",
                "padding": "24px",
            }
        },
    )


# =============================================================================
# Table
# =============================================================================


@register_strategy(ElementType.TABLE)
def build_table(state: BuilderState) -> Element:
    return build_element(
        state,
        settings={
            "caption": "",
            "bordered": True,
            "striped": False,
            "hoverable": True,
            "compact": False,
            "columns": [
                {"id": f"col-{n}", "header": f"Column {n}", "align": "left"}
                for n in (1, 2, 3)
            ],
        },
        styles={
            "default": {
                "width": "100%",
                "minHeight": "120px",
                "borderCollapse": "collapse",
                "border": INPUT_BORDER,
                "borderRadius": "8px",
                "overflow": "hidden",
                "fontSize": "14px",
                "backgroundColor": SURFACE,
            }
        },
    )


# =============================================================================
# Container / Layout
# =============================================================================


@register_strategy(ElementType.FRAME)
def build_frame(state: BuilderState) -> Element:
    return build_element(
        state,
        styles={
            "default": {
                "minHeight": "160px",
                "width": "100%",
                "margin": "0 auto",
                "backgroundColor": SURFACE,
                "borderRadius": "8px",
                "padding": "16px",
            }
        },
    )


@register_strategy(ElementType.SECTION)
def build_section(state: BuilderState) -> Element:
    return build_element(
        state,
        styles={
            "default": {
                "width": "100%",
                "minHeight": "220px",
                "backgroundColor": "var(--bg-surface)",
                "padding": "32px 24px",
            }
        },
    )


@register_strategy(ElementType.NAV)
def build_nav(state: BuilderState) -> Element:
    return build_element(
        state,
        styles={
            "default": {
                "width": "100%",
                "minHeight": "60px",
                "display": "flex",
                "alignItems": "center",
                "justifyContent": "space-between",
                "padding": "12px 24px",
                "backgroundColor": SURFACE,
                "borderBottom": SUBTLE_BORDER,
            }
        },
    )


@register_strategy(ElementType.HEADER)
def build_header(state: BuilderState) -> Element:
    return build_element(
        state,
        styles={
            "default": {
                "width": "100%",
                "minHeight": "80px",
                "padding": "24px",
                "backgroundColor": SURFACE,
                "borderBottom": SUBTLE_BORDER,
            }
        },
    )


@register_strategy(ElementType.FOOTER)
def build_footer(state: BuilderState) -> Element:
    return build_element(
        state,
        styles={
            "default": {
                "width": "100%",
                "minHeight": "80px",
                "padding": "24px",
                "backgroundColor": "var(--bg-surface, #f8fafc)",
                "borderTop": SUBTLE_BORDER,
            }
        },
    )


@register_strategy(ElementType.ARTICLE)
def build_article(state: BuilderState) -> Element:
    return build_element(
        state,
        styles={
            "default": {
                "width": "100%",
                "minHeight": "200px",
                "padding": "24px",
                "backgroundColor": SURFACE,
                "border": SUBTLE_BORDER,
                "borderRadius": "12px",
            }
        },
    )


@register_strategy(ElementType.ASIDE)
def build_aside(state: BuilderState) -> Element:
    return build_element(
        state,
        styles={
            "default": {
                "width": "100%",
                "minHeight": "160px",
                "padding": "20px",
                "backgroundColor": "var(--bg-muted, #f8fafc)",
                "borderLeft": "3px solid var(--color-primary, #2563eb)",
                "borderRadius": "0 8px 8px 0",
            }
        },
    )


@register_strategy(ElementType.CAROUSEL)
def build_carousel(state: BuilderState) -> Element:
    return build_element(
        state,
        settings={"autoplay": True},
        styles={
            "default": {
                "width": "100%",
                "height": "360px",
                "backgroundColor": SURFACE,
                "border": SUBTLE_BORDER,
                "borderRadius": "12px",
                "padding": "16px",
                "overflow": "hidden",
            }
        },
    )


# =============================================================================
# CMS
# =============================================================================


def _cms_styles(min_height: str, padding: str) -> dict:
    return {
        "default": {
            "width": "100%",
            "minHeight": min_height,
            "backgroundColor": SURFACE,
            "border": SUBTLE_BORDER,
            "borderRadius": "8px",
            "padding": padding,
        }
    }


@register_strategy(ElementType.CMS_CONTENT_LIST)
def build_cms_content_list(state: BuilderState) -> Element:
    return build_element(
        state,
        settings={
            "contentTypeId": "",
            "displayMode": "list",
            "limit": 10,
            "sortBy": "createdAt",
            "sortOrder": "desc",
        },
        styles=_cms_styles("200px", "16px"),
    )


@register_strategy(ElementType.CMS_CONTENT_ITEM)
def build_cms_content_item(state: BuilderState) -> Element:
    return build_element(
        state,
        settings={"contentTypeId": "", "itemSlug": ""},
        styles=_cms_styles("300px", "24px"),
    )


@register_strategy(ElementType.CMS_CONTENT_GRID)
def build_cms_content_grid(state: BuilderState) -> Element:
    return build_element(
        state,
        settings={
            "contentTypeId": "",
            "displayMode": "grid",
            "limit": 6,
            "sortBy": "createdAt",
            "sortOrder": "desc",
            "fieldsToShow": ["title", "content"],
        },
        styles=_cms_styles("400px", "16px"),
    )
