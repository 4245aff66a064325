"""Google Sheets credential resolution, OAuth2 flow and Sheets client."""
