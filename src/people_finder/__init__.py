"""Pedestrian Silhouette Classifier.

This package locates body-part landmarks on outlined silhouettes using
pixel heuristics, learns landmark ranges from ground-truth pedestrians and
classifies new silhouettes as pedestrians, ambiguous objects or noise.
"""
__version__ = "1.0.0"
