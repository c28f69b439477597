"""Expression console core: segmentation, evaluation, rendering and history."""
