# app/application/dtos/base_dto.py

"""
Base class for custom DTOs.

This module defines CustomBaseModel, which extends Pydantic's BaseModel
with behaviour shared by every DTO of the application.
"""

from pydantic import BaseModel
from typing import Any, Dict


class CustomBaseModel(BaseModel):
    """
    Custom base model for all application DTOs.

    Adds to_dict(), a serialization that leaves out fields without a value.
    """

    def to_dict(self, *args, **kwargs) -> Dict[str, Any]:
        """
        Serialize the model, filtering out fields whose value is None.

        This is what turns a partial update DTO into a patch: fields that
        were not supplied never reach the repository.

        Args:
            *args: Positional arguments forwarded to model_dump
            **kwargs: Keyword arguments forwarded to model_dump

        Returns:
            Dict[str, Any]: Model attributes, excluding None values
        """
        d = self.model_dump(*args, **kwargs)
        return {k: v for k, v in d.items() if v is not None}
