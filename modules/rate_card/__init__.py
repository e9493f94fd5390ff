from .rate_card_service import RateCardService, normalize_weight
