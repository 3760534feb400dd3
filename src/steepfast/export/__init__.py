from steepfast.export.image import export_image, rasterize_svg_to_png
from steepfast.export.svg import export_svg, svg_text

__all__ = ["export_image", "export_svg", "rasterize_svg_to_png", "svg_text"]
