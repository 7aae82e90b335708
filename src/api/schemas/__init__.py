# Request and response models; every resource has Create, Update, Record, and envelope models.
