"""Character helpers, integer formatting, Print and Stream bases, serial settings, DMA buffer pools and pluggable USB modules."""

__version__ = "0.1.0"

__all__ = ["wcharacter", "itoa", "printer", "stream", "serial", "dma_pool", "pluggable_usb"]