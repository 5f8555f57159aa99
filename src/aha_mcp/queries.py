"""Request builders for the Aha! GraphQL and REST APIs.

Builders only describe requests (GraphQLRequest / RestRequest); client.AhaClient
executes them.
"""
from typing import Any, Mapping
from urllib.parse import quote

from .fields import (
    STANDARD_FEATURE_FIELDS,
    STANDARD_RELEASE_FIELDS,
    partition_fields,
)
from .references import RecordKind
from .schemas import GraphQLRequest, RestRequest

DEFAULT_PER_PAGE = 100


# ============================================================================
# GraphQL documents
# ============================================================================

ESTIMATE_FIELDS = """
        text
        value
        units"""

USER_FIELDS = """
        id
        name
        email"""

WORKFLOW_STATUS_FIELDS = """
        id
        name
        color
        position"""

TAG_FIELDS = """
        id
        name
        color"""

GET_FEATURE_QUERY = f"""
  query GetFeature($id: ID!) {{
    feature(id: $id) {{
      id
      referenceNum
      name
      createdAt
      updatedAt
      startDate
      dueDate
      position
      score
      progress
      remainingEstimate {{{ESTIMATE_FIELDS}
      }}
      originalEstimate {{{ESTIMATE_FIELDS}
      }}
      workDone {{{ESTIMATE_FIELDS}
      }}
      description {{
        markdownBody
      }}
      workflowStatus {{{WORKFLOW_STATUS_FIELDS}
      }}
      release {{
        id
        referenceNum
        name
        releaseDate
        startOn
        developmentStartedOn
        customFieldValues {{
          key
          value
        }}
      }}
      assignedToUser {{{USER_FIELDS}
      }}
      createdByUser {{{USER_FIELDS}
      }}
      team {{
        id
        name
      }}
      project {{
        id
        referencePrefix
        name
        customFieldDefinitions {{
          key
          name
          type
        }}
      }}
      initiative {{
        id
        referenceNum
        name
      }}
      epic {{
        id
        referenceNum
        name
      }}
      tags {{{TAG_FIELDS}
      }}
      requirements {{
        id
        referenceNum
        name
        workflowStatus {{
          name
        }}
      }}
      customFieldValues {{
        id
        key
        value
        humanValue
      }}
      extensionFields {{
        id
        name
        value
      }}
    }}
  }}
"""

GET_REQUIREMENT_QUERY = f"""
  query GetRequirement($id: ID!) {{
    requirement(id: $id) {{
      id
      referenceNum
      name
      createdAt
      updatedAt
      position
      description {{
        markdownBody
      }}
      workflowStatus {{{WORKFLOW_STATUS_FIELDS}
      }}
      assignedToUser {{{USER_FIELDS}
      }}
      createdByUser {{{USER_FIELDS}
      }}
      team {{
        id
        name
      }}
      project {{
        id
        referencePrefix
        name
      }}
      feature {{
        id
        referenceNum
        name
        release {{
          id
          referenceNum
          name
          releaseDate
          customFieldValues {{
            key
            value
          }}
        }}
      }}
      tags {{{TAG_FIELDS}
      }}
      originalEstimate {{{ESTIMATE_FIELDS}
      }}
      remainingEstimate {{{ESTIMATE_FIELDS}
      }}
      workDone {{{ESTIMATE_FIELDS}
      }}
      customFieldValues {{
        key
        value
      }}
    }}
  }}
"""

PAGE_PARENT_SELECTION = """
      parent {
        id
        referenceNum
        name
      }"""

PAGE_QUERY_TEMPLATE = """
  query GetPage($id: ID!) {{
    page(id: $id) {{
      id
      referenceNum
      name
      createdAt
      updatedAt
      description {{
        markdownBody
      }}
      children {{
        id
        referenceNum
        name
      }}{parent}
    }}
  }}
"""

INTROSPECT_FEATURE_QUERY = """
  query IntrospectFeature {
    __type(name: "Feature") {
      name
      fields(includeDeprecated: true) {
        name
        args {
          name
          type {
            name
            kind
          }
        }
        type {
          name
          kind
          ofType {
            name
            kind
          }
        }
      }
    }
  }
"""

SEARCH_DOCUMENTS_QUERY = """
  query SearchDocuments($query: String!, $searchableType: [String!]!) {
    searchDocuments(filters: {query: $query, searchableType: $searchableType}) {
      nodes {
        name
        url
        searchableId
        searchableType
      }
      currentPage
      totalCount
      totalPages
      isLastPage
    }
  }
"""

RECORD_QUERIES: dict[RecordKind, tuple[str, str]] = {
    RecordKind.FEATURE: ("GetFeature", GET_FEATURE_QUERY),
    RecordKind.REQUIREMENT: ("GetRequirement", GET_REQUIREMENT_QUERY),
}

# Top-level key of the GraphQL `data` object for each kind
RESPONSE_ENVELOPES: dict[RecordKind, str] = {
    RecordKind.FEATURE: "feature",
    RecordKind.REQUIREMENT: "requirement",
    RecordKind.PAGE: "page",
}


# ============================================================================
# GraphQL builders
# ============================================================================

def build_record_query(kind: RecordKind, reference: str) -> GraphQLRequest:
    """Build the feature or requirement query for a reference."""
    if kind == RecordKind.PAGE:
        return build_page_query(reference)
    operation_name, query = RECORD_QUERIES[kind]
    return GraphQLRequest(query=query, variables={"id": reference}, operation_name=operation_name)


def build_page_query(reference: str, include_parent: bool = False) -> GraphQLRequest:
    """Build the page query.

    The parent selection is only part of the document when include_parent is
    set, so the backend is never asked for parent data otherwise.
    """
    query = PAGE_QUERY_TEMPLATE.format(parent=PAGE_PARENT_SELECTION if include_parent else "")
    return GraphQLRequest(query=query, variables={"id": reference}, operation_name="GetPage")


def build_search_query(query: str, searchable_type: str = "Page") -> GraphQLRequest:
    return GraphQLRequest(
        query=SEARCH_DOCUMENTS_QUERY,
        variables={"query": query, "searchableType": [searchable_type]},
        operation_name="SearchDocuments",
    )


def build_introspection_query() -> GraphQLRequest:
    return GraphQLRequest(query=INTROSPECT_FEATURE_QUERY, operation_name="IntrospectFeature")


# ============================================================================
# REST builders
# ============================================================================

def path_segment(value: Any) -> str:
    """Percent-encode a caller-supplied value for use as one URL path segment."""
    return quote(str(value), safe="")


def build_get_feature(reference: str) -> RestRequest:
    return RestRequest(method="GET", path=f"/api/v1/features/{path_segment(reference)}")


def build_update_feature(reference: str, fields: Mapping[str, Any]) -> RestRequest:
    """Build the feature PUT; non-standard keys go under custom_fields."""
    body = partition_fields(fields, STANDARD_FEATURE_FIELDS).to_body("feature")
    return RestRequest(method="PUT", path=f"/api/v1/features/{path_segment(reference)}", json_body=body)


def build_release_features_page(
    release_reference: str,
    page: int,
    per_page: int = DEFAULT_PER_PAGE,
) -> RestRequest:
    return RestRequest(
        method="GET",
        path=f"/api/v1/releases/{path_segment(release_reference)}/features",
        params={"page": page, "per_page": per_page},
    )


def build_products_page(page: int, per_page: int = DEFAULT_PER_PAGE) -> RestRequest:
    return RestRequest(
        method="GET",
        path="/api/v1/products",
        params={"page": page, "per_page": per_page},
    )


def build_product_releases_page(
    product_id: Any,
    page: int,
    per_page: int = DEFAULT_PER_PAGE,
) -> RestRequest:
    return RestRequest(
        method="GET",
        path=f"/api/v1/products/{path_segment(product_id)}/releases",
        params={"page": page, "per_page": per_page},
    )


def build_update_release(reference: str, fields: Mapping[str, Any]) -> RestRequest:
    """Build the release PUT; non-standard keys go under custom_fields."""
    body = partition_fields(fields, STANDARD_RELEASE_FIELDS).to_body("release")
    return RestRequest(method="PUT", path=f"/api/v1/releases/{path_segment(reference)}", json_body=body)
