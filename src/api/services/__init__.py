# Resource services built on ResourceService, plus the partial update and aggregate refresh helpers.
