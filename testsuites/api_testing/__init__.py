"""API testing: framework components and the API test suites."""
