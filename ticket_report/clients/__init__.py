from .image_loader import ImageLoader, ImageLoadError, TransientImageError, LoadedImage

__all__ = [
    "ImageLoader", "ImageLoadError", "TransientImageError", "LoadedImage",
]
