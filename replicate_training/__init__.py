from .exceptions import EncodingError, TrainingClientError, TrainingSubmissionError
from .schemas import FluxTrainingInput, TrainingJob, TrainingRequest
from .training_client import create_flux_training, get_training
