from .tracking_number import TrackingNumber, check_cb32, int_to_cb32, cb32_to_int
