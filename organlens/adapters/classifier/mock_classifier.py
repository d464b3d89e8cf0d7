import random
from organlens.adapters.classifier.base import ClassifierAdapter
from organlens.orchestrator.contracts import ClassificationResult, ClassifyOutcome

_CANNED = {
    "heart": (
        "Organ Model: heart\n"
        "Function in Frogs: Pumps blood around the frog's body.\n"
        "Fun Fact: A frog's heart has three chambers instead of four."
    ),
    "lungs": (
        "Organ Model: lungs\n"
        "Function in Frogs: Take in air so oxygen can reach the blood.\n"
        "Fun Fact: Frogs also breathe through their skin, even underwater."
    ),
    "liver": (
        "Organ Model: liver\n"
        "Function in Frogs: Cleans the blood and stores energy.\n"
        "Fun Fact: The liver is the largest organ inside a frog's body."
    ),
}


class MockClassifier(ClassifierAdapter):
    def __init__(self, status_store, label: str | None = None):
        self.status = status_store
        self._label = label

    def classify(self, encoded_image: str | bytes) -> ClassifyOutcome:
        if not encoded_image:
            raise ValueError("encoded_image must be non-empty")
        label = self._label or random.choice(list(_CANNED))
        self.status.log(f"mock_classifier: {label}")
        return ClassifyOutcome(result=ClassificationResult(label=label, description=_CANNED[label]))
