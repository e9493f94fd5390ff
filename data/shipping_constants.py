# volume (cubic inches) per unit of dimensional weight
DIM_DIVISOR = 166.00

# the only controlled substance with routing rules
TOBACCO = "tobacco"

# tracking numbers
TRACKING_NUMBER_HEADER = "PBR"
TRACKING_NUMBER_SEQUENCE = "tracking_number"
# five base-32 characters
TRACKING_NUMBER_SEQUENCE_END = 32**5
TRACKING_NUMBER_ORIGIN_DATE = "2020-01-01"
