"""Static SVG snapshot of a ``Scene``.

Edges and nodes sit in two groups translated to the canvas centre,
inside an outer group carrying the pan/zoom transform. Inactive nodes are
faded through a CSS class; the legend is drawn in the top-left corner and
a visible tooltip is drawn as text at its position.
"""

from __future__ import annotations

from xml.sax.saxutils import escape, quoteattr

from coauthorship.config import NetworkConfig
from coauthorship.render import Scene

STYLE = """
  .inactive { opacity: 0.1; }
  .label { font: 6px sans-serif; fill: #333; pointer-events: none; }
  .legend text { font: 14px sans-serif; }
  .tooltip text { font: 12px sans-serif; fill: #000; }
"""

LEGEND_LINE_HEIGHT = 18


def _n(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")


def scene_to_svg(scene: Scene, config: NetworkConfig | None = None) -> str:
    """Serialise *scene* as a standalone SVG document."""
    config = config or NetworkConfig()
    w, h = config.width, config.height
    center = f"translate({_n(w / 2)},{_n(h / 2)})"

    out = [
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {w} {h}" width="{w}" height="{h}">',
        f"<style>{STYLE}</style>",
        f"<g transform={quoteattr(scene.transform)}>",
        f'<g class="links" transform="{center}">',
    ]
    for line in scene.lines.values():
        style = f"stroke-width: {_n(line.width)}; stroke: {line.color}; opacity: {line.opacity}"
        out.append(
            f'<line x1="{_n(line.start[0])}" y1="{_n(line.start[1])}" '
            f'x2="{_n(line.end[0])}" y2="{_n(line.end[1])}" '
            f"style={quoteattr(style)}/>"
        )
    out.append("</g>")

    out.append(f'<g class="nodes" transform="{center}">')
    for node in scene.nodes.values():
        classes = node.css_class + (" inactive" if node.name in scene.inactive else "")
        out.append(
            f'<g class="{classes}" transform="translate({_n(node.center[0])},{_n(node.center[1])})">'
            f'<circle r="{_n(node.radius)}" fill={quoteattr(node.fill)}/>'
            f'<text class="label" text-anchor="middle">{escape(node.label)}</text></g>'
        )
    out.append("</g>")
    out.append("</g>")

    if scene.legend:
        out.append('<g class="legend" transform="translate(20,20)">')
        for i, (label, color) in enumerate(scene.legend):
            out.append(
                f'<text y="{(i + 1) * LEGEND_LINE_HEIGHT}" fill={quoteattr(color)}>{escape(label)}</text>'
            )
        out.append("</g>")

    if scene.tooltip is not None:
        x, y = scene.tooltip.position
        out.append(f'<g class="tooltip" transform="translate({_n(x)},{_n(y)})"><text>')
        for i, line in enumerate(scene.tooltip.lines):
            out.append(f'<tspan x="0" dy="{0 if i == 0 else "1.2em"}">{escape(line)}</tspan>')
        out.append("</text></g>")

    out.append("</svg>")
    return "\n".join(out) + "\n"
