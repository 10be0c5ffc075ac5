"""HTTP API error type, request and response models, and column-to-JSON encoding."""