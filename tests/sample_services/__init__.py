"""Sample services used by the test suite, importable by dotted path (e.g. ``sample_services.mailer.Mailer``)."""
