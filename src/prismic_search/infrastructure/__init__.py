"""Infrastructure layer: HTTP transport and the Prismic GraphQL client."""
