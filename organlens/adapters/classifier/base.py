class ClassifierAdapter:
    def classify(self, encoded_image: str | bytes):
        """Return ClassifyOutcome for one base64 still image. Must not raise for network/server failures."""
        raise NotImplementedError

    def close(self):
        pass
