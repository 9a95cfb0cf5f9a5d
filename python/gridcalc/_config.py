"""Configuration model for gridcalc."""

from pydantic import BaseModel, ConfigDict, Field

from gridcalc._utils import MAX_COLS, MAX_ROWS


class GridConfig(BaseModel):
    """Grid geometry and recalculation limits."""

    model_config = ConfigDict(frozen=True)

    # Cell geometry (pixels)
    cell_width: int = Field(100, ge=1, description="Width of one column in pixels")
    cell_height: int = Field(30, ge=1, description="Height of one row in pixels")
    header_height: int = Field(30, ge=0, description="Height of the column header strip")
    row_header_width: int = Field(60, ge=0, description="Width of the row number strip")

    # Virtualization
    overscan_rows: int = Field(
        2, ge=0, description="Rows rendered beyond the visible edge"
    )
    overscan_cols: int = Field(
        2, ge=0, description="Columns rendered beyond the visible edge"
    )
    total_rows: int = Field(MAX_ROWS, ge=1, le=MAX_ROWS, description="Rows in the grid")
    total_cols: int = Field(MAX_COLS, ge=1, le=MAX_COLS, description="Columns in the grid")

    # Recalculation
    max_passes: int = Field(
        100,
        ge=1,
        description="Maximum convergence passes per recalculation before giving up",
    )

    @classmethod
    def from_env(cls) -> "GridConfig":
        """Create config from ``GRIDCALC_*`` environment variables.

        A ``.env`` file is loaded first if present (existing variables win).
        """
        import os

        from dotenv import load_dotenv

        load_dotenv()

        values: dict[str, str] = {}
        for name in cls.model_fields:
            raw = os.getenv(f"GRIDCALC_{name.upper()}")
            if raw is not None and raw.strip():
                values[name] = raw.strip()
        return cls.model_validate(values)
