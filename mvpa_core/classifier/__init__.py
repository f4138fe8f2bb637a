'Classifier inference module.'

from mvpa_core.classifier.lda import (
    LdaModel,
    MulticlassLdaClassifier,
    centroid_distances,
    predict,
    predict_across_time,
)

__all__ = [
    'LdaModel',
    'MulticlassLdaClassifier',
    'centroid_distances',
    'predict',
    'predict_across_time'
]
