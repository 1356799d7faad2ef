"""Server-rendered entry page for the video client.

Every GET that is not an API call or a bundled asset lands here:
- identity comes from the request cookies
- the catalog comes from the backend API (empty when it is unavailable)
- the matched view is rendered and wrapped in the HTML shell together with
  the initial state the client hydrates from
"""
