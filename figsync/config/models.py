from pydantic import BaseModel, Field
from typing import Literal


class FigmaConfig(BaseModel):
    token_env: str = "FIGMA_API_TOKEN"
    base_url: str = "https://api.figma.com"
    timeout: float = Field(default=60.0, gt=0)


class ExportConfig(BaseModel):
    scale: int = Field(default=2, ge=1, le=4)
    format: Literal["png", "jpg", "svg", "pdf"] = "png"
    screenshot_dir: str = "figma-screenshots"
    embed_image_link: bool = False


class SpecsConfig(BaseModel):
    extract_size: bool = True
    extract_colors: bool = True
    extract_typography: bool = True
    extract_spacing: bool = False


class ScanConfig(BaseModel):
    directory: str = "."
    pattern: str = "**/*.mdx"
    exclude: list[str] = Field(default_factory=lambda: [
        "node_modules", ".git", ".github", "dist", "build"
    ])


class FigsyncConfig(BaseModel):
    figma: FigmaConfig = Field(default_factory=FigmaConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    specs: SpecsConfig = Field(default_factory=SpecsConfig)
    scan: ScanConfig = Field(default_factory=ScanConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
