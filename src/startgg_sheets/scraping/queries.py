"""GraphQL documents sent to the start.gg API."""

TOURNAMENTS_OPERATION = "TournamentsByDate"

# Published, publicly searchable, in-person tournaments starting inside the
# [startAt, endAt] window, earliest first.
TOURNAMENTS_QUERY = """
query TournamentsByDate($page: Int!, $perPage: Int!, $startAt: Timestamp!, $endAt: Timestamp!) {
  tournaments(query: {
    page: $page
    perPage: $perPage
    sortBy: "startAt asc"
    filter: {
      afterDate: $startAt
      beforeDate: $endAt
      published: true
      publiclySearchable: true
      hasOnlineEvents: false
    }
  }) {
    nodes {
      id
      slug
      name
      startAt
      countryCode
      addrState
      venueAddress
      events {
        id
        videogame {
          id
          name
        }
      }
    }
  }
}
"""
