# tests/conftest.py

from pathlib import Path
from typing import Dict, List, Optional, Sequence

import numpy as np
import pytest
from PIL import Image

from imgsearch.auxiliary.base import LabelProvider
from imgsearch.auxiliary.label_table import LabelEmbeddingTable
from imgsearch.embedders.base import Embedder
from imgsearch.errors import ProviderInitializationError

RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)

TEXT_VECTORS: Dict[str, List[float]] = {
    "mountain": [1.0, 0.0, 0.0],
    "forest": [0.0, 1.0, 0.0],
    "cat": [0.0, 0.0, 1.0],
    "alp": [0.8, 0.6, 0.0],
    "volcano": [0.6, 0.8, 0.0],
    "tabby": [0.0, 0.6, 0.8],
    "test": [0.0, 1.0, 0.0],
}


class FakeEmbedder(Embedder):
    """Deterministic embedder: images embed as their mean colour, texts via TEXT_VECTORS."""

    def __init__(self, fail_on_init: bool = False, fail_on_images: bool = False) -> None:
        self.name = "fake"
        self.model_id = "fake/colour-clip"
        self.fail_on_init = fail_on_init
        self.fail_on_images = fail_on_images
        self.image_calls = 0
        self.text_calls = 0
        self._ready = False

    @property
    def is_initialized(self) -> bool:
        return self._ready

    @property
    def backend(self) -> str:
        return "numpy (test)"

    def initialize(self) -> None:
        if self.fail_on_init:
            raise ProviderInitializationError("weights missing")
        self._ready = True

    def embed_images(self, images: Sequence[Image.Image]) -> List[np.ndarray]:
        if self.fail_on_images:
            raise RuntimeError("inference crashed")
        self.image_calls += len(images)
        return [self._normalize(np.asarray(image, dtype=np.float64).reshape(-1, 3).mean(axis=0)) for image in images]

    def embed_text(self, text: str) -> np.ndarray:
        self.text_calls += 1
        return self._normalize(np.array(TEXT_VECTORS.get(text, [1.0, 1.0, 1.0])))


class FakeLabelProvider(LabelProvider):
    """Predicts labels from an image's dominant channel."""

    LABELS_BY_CHANNEL = {0: ["alp", "volcano"], 1: ["unmapped"], 2: ["tabby", "unmapped"]}

    def __init__(self) -> None:
        self.name = "fake-labels"
        self._table: Optional[LabelEmbeddingTable] = None

    @property
    def is_initialized(self) -> bool:
        return self._table is not None

    @property
    def label_table(self) -> LabelEmbeddingTable:
        return self._table

    def initialize(self, embedder: Embedder) -> None:
        self._table = LabelEmbeddingTable.build(["alp", "volcano", "tabby"], embedder.embed_texts, show_progress=False)

    def classify(self, image: Image.Image, top_k: Optional[int] = None) -> List[str]:
        channel = int(np.asarray(image, dtype=np.float64).reshape(-1, 3).mean(axis=0).argmax())
        return self.LABELS_BY_CHANNEL[channel][: top_k or 20]


def make_image(path: Path, color=RED, size=(16, 16)) -> Path:
    Image.new("RGB", size, color).save(path)
    return path


@pytest.fixture
def image_folder(tmp_path):
    """Folder with an on-topic mountain image and an off-topic cat image."""

    folder = tmp_path / "images"
    folder.mkdir()
    make_image(folder / "mountain.jpg", RED)
    make_image(folder / "cat.jpg", BLUE)
    return folder


@pytest.fixture
def embedder():
    return FakeEmbedder()
