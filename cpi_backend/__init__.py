"""Backend for the ComfyUI PNG prompt inspector."""
