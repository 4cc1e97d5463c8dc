"""Generation orchestration: resilient caller, image URLs and output parsing."""
