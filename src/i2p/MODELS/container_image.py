"""
Models describing what the container runtime reports about images and containers.
"""
from typing import List, Dict, Optional
from pydantic import BaseModel


class ImageInspection(BaseModel):
    """
    The parts of an image's configuration the extractors care about.
    """
    id: str = ""
    cmd: List[str] = []
    entrypoint: List[str] = []
    working_dir: Optional[str] = None
    labels: Dict[str, str] = {}


class ContainerInspection(BaseModel):
    """
    The parts of a created container's configuration the extractors care about.
    """
    id: str
    image: str = ""
    working_dir: Optional[str] = None
