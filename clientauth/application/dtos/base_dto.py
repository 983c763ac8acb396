# clientauth/application/dtos/base_dto.py

"""
Base class for custom dtos.

This module defines the CustomBaseModel class that extends Pydantic's
BaseModel with configuration shared by every dto of the application.
"""

from pydantic import BaseModel, ConfigDict


class CustomBaseModel(BaseModel):
    """
    Custom base model for all dtos of the application.

    Reads attributes from objects, so domain dataclasses can be
    validated directly into output dtos.
    """

    model_config = ConfigDict(from_attributes=True)
