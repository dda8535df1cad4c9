"""Trade journal dashboard: session, live prices, and page models over the journal API."""
