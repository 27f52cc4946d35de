# tests/test_mobilenet.py

import json
import sys
import types

import numpy as np
import pytest
from PIL import Image

from imgsearch.config.settings import AuxScorerSettings
from imgsearch.auxiliary.label_table import LabelEmbeddingTable
from imgsearch.auxiliary.mobilenet_scorer import IMAGENET_MEAN, IMAGENET_STD, MobileNetScorer
from imgsearch.errors import ProviderInitializationError, ProviderUnavailableError
from conftest import FakeEmbedder


class FakeSession:
    def __init__(self, logits=None, error=None):
        self.logits = logits
        self.error = error
        self.feeds = None

    def run(self, output_names, feeds):
        self.feeds = feeds
        if self.error is not None:
            raise self.error
        return [self.logits]


def loaded_scorer(session, labels):
    scorer = MobileNetScorer(AuxScorerSettings(top_k=3))
    scorer.labels = labels
    scorer._session = session
    scorer._label_table = LabelEmbeddingTable({})
    return scorer


def test_preprocess_layout_and_normalization():
    scorer = MobileNetScorer()
    image = Image.new("RGB", (50, 30), (255, 0, 128))

    tensor = scorer.preprocess(image)

    assert tensor.shape == (1, 3, 224, 224)
    assert tensor.dtype == np.float32
    expected = (np.array([1.0, 0.0, 128 / 255]) - IMAGENET_MEAN) / IMAGENET_STD
    assert tensor[0, :, 10, 10] == pytest.approx(expected, abs=1e-5)


def test_classify_returns_top_k_labels_best_first():
    labels = ["tench", "goldfish", "great white shark", "tiger shark"]
    session = FakeSession(logits=np.array([[0.1, 2.0, -1.0, 5.0]], dtype=np.float32))
    scorer = loaded_scorer(session, labels)

    predicted = scorer.classify(Image.new("RGB", (8, 8)))

    assert predicted == ["tiger shark", "goldfish", "tench"]
    assert "input" in session.feeds


def test_classify_maps_out_of_range_indices_to_unknown():
    session = FakeSession(logits=np.array([[0.0, 9.0]], dtype=np.float32))
    scorer = loaded_scorer(session, ["only-label"])

    assert scorer.classify(Image.new("RGB", (8, 8)), top_k=1) == ["unknown"]


def test_classify_degrades_to_empty_list_on_failure():
    scorer = loaded_scorer(FakeSession(error=RuntimeError("bad input")), ["tench"])

    assert scorer.classify(Image.new("RGB", (8, 8))) == []


def test_classify_handles_empty_output():
    scorer = loaded_scorer(FakeSession(logits=np.array([])), ["tench"])

    assert scorer.classify(Image.new("RGB", (8, 8))) == []


def test_classify_requires_initialization():
    with pytest.raises(ProviderUnavailableError):
        MobileNetScorer().classify(Image.new("RGB", (8, 8)))
    with pytest.raises(ProviderUnavailableError):
        MobileNetScorer().label_table


def test_load_labels(tmp_path):
    labels_path = tmp_path / "labels.json"
    labels_path.write_text(json.dumps(["tench", "goldfish"]))

    scorer = MobileNetScorer(AuxScorerSettings(labels_path=labels_path))

    assert scorer._load_labels() == ["tench", "goldfish"]


@pytest.mark.parametrize("content", ["{not json", json.dumps({"0": "tench"}), json.dumps([1, 2])])
def test_load_labels_rejects_bad_files(tmp_path, content):
    labels_path = tmp_path / "labels.json"
    labels_path.write_text(content)

    with pytest.raises(ProviderInitializationError):
        MobileNetScorer(AuxScorerSettings(labels_path=labels_path))._load_labels()


def test_load_labels_missing_file(tmp_path):
    scorer = MobileNetScorer(AuxScorerSettings(labels_path=tmp_path / "missing.json"))

    with pytest.raises(ProviderInitializationError):
        scorer._load_labels()


@pytest.fixture
def fake_onnxruntime(monkeypatch):
    """Install a stand-in ``onnxruntime`` whose sessions are recorded instead of loaded."""

    module = types.ModuleType("onnxruntime")
    module.created = []
    module.error = None

    def inference_session(path, providers=None):
        if module.error is not None:
            raise module.error
        session = FakeSession(logits=np.zeros((1, 2), dtype=np.float32))
        module.created.append((path, providers))
        return session

    module.InferenceSession = inference_session
    monkeypatch.setitem(sys.modules, "onnxruntime", module)
    return module


@pytest.fixture
def labels_path(tmp_path):
    path = tmp_path / "labels.json"
    path.write_text(json.dumps(["mountain", "cat"]))
    return path


def test_initialize_builds_label_table(fake_onnxruntime, labels_path, tmp_path):
    model_path = tmp_path / "mobilenet_v2.onnx"
    scorer = MobileNetScorer(AuxScorerSettings(model_path=model_path, labels_path=labels_path))

    scorer.initialize(FakeEmbedder())

    assert scorer.is_initialized
    assert scorer.labels == ["mountain", "cat"]
    assert sorted(scorer.label_table) == ["cat", "mountain"]
    assert fake_onnxruntime.created == [(str(model_path), ["CPUExecutionProvider"])]

    scorer.initialize(FakeEmbedder())

    assert len(fake_onnxruntime.created) == 1


def test_initialize_wraps_session_errors(fake_onnxruntime, labels_path):
    fake_onnxruntime.error = RuntimeError("corrupt model")
    scorer = MobileNetScorer(AuxScorerSettings(labels_path=labels_path))

    with pytest.raises(ProviderInitializationError, match="corrupt model"):
        scorer.initialize(FakeEmbedder())
    assert not scorer.is_initialized


def test_initialize_missing_labels_file(fake_onnxruntime, tmp_path):
    scorer = MobileNetScorer(AuxScorerSettings(labels_path=tmp_path / "missing.json"))

    with pytest.raises(ProviderInitializationError):
        scorer.initialize(FakeEmbedder())
    assert not scorer.is_initialized
