"""Camera / selfie capture integration."""

from integrations.camera.selfie import FaceBox, FaceQuality, SelfieCapture, grade_face, load_selfie

__all__ = ["FaceBox", "FaceQuality", "SelfieCapture", "grade_face", "load_selfie"]
