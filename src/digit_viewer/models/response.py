"""
Generate Response Schema
========================

Pydantic model for the body returned by `GET <base>/generate/{digit}`.

Input Contract (from the generation backend):
    {
        "images": [
            [[0, 0, ..., 0], ..., [0, 0, ..., 0]],   # 28 rows of 28 ints
            ...
        ]
    }

Guarantees:
    - images are ordered as the backend produced them
    - each image is row-major (image[y][x]), values in [0, 255]

A missing "images" key validates to an empty list. Empty is a soft
failure decided by the caller, not a schema error.

Example:
    from digit_viewer.models.response import GenerateResponse

    body = GenerateResponse.model_validate(response.json())
    print(f"Received {len(body.images)} images")
"""

from typing import Annotated, List

from pydantic import BaseModel, Field


Pixel = Annotated[int, Field(ge=0, le=255)]


class GenerateResponse(BaseModel):
    """
    Schema for generation responses.

    Attributes:
        images: Sequence of 2-D luminance arrays
    """

    images: List[List[List[Pixel]]] = Field(
        default_factory=list,
        description="Generated images, each a 28x28 row-major array",
    )

    @property
    def is_empty(self) -> bool:
        """Whether the backend returned no images."""
        return len(self.images) == 0
