import json

REPOSITORY_PAGE_SIZE = 100
COMMIT_PAGE_SIZE = 100


#============================================
def graphql_string(value: str) -> str:
	"""
	Quote a value as a GraphQL string literal.
	"""
	# GraphQL string escapes are a subset of JSON's
	return json.dumps(str(value), ensure_ascii=False)


#============================================
def viewer_identity_query() -> str:
	"""
	Build the query for the authenticated viewer login and node id.
	"""
	return """
query {
  viewer {
    login
    id
  }
}
"""


#============================================
def contributed_repositories_query(login: str) -> str:
	"""
	Build the query listing repositories the user contributed to.
	"""
	return f"""
query {{
  user(login: {graphql_string(login)}) {{
    repositoriesContributedTo(last: {REPOSITORY_PAGE_SIZE}, includeUserRepositories: true) {{
      nodes {{
        isFork
        name
        owner {{
          login
        }}
      }}
    }}
  }}
}}
"""


#============================================
def commit_history_query(author_id: str, name: str, owner: str) -> str:
	"""
	Build the query for default-branch commit dates authored by one user id.
	"""
	return f"""
query {{
  repository(owner: {graphql_string(owner)}, name: {graphql_string(name)}) {{
    defaultBranchRef {{
      target {{
        ... on Commit {{
          history(first: {COMMIT_PAGE_SIZE}, author: {{ id: {graphql_string(author_id)} }}) {{
            edges {{
              node {{
                committedDate
              }}
            }}
          }}
        }}
      }}
    }}
  }}
}}
"""
