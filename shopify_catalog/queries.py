"""
GraphQL documents for the Shopify Admin API.

Field names and connection shapes must track the external schema exactly.
"""

# Nested connection caps per product. These are NOT the outer pagination;
# truncation is reported per record via pageInfo.hasNextPage.
MEDIA_PAGE_SIZE = 10
VARIANT_PAGE_SIZE = 20
METAFIELD_PAGE_SIZE = 20
INVENTORY_LEVEL_PAGE_SIZE = 5

DEFAULT_PAGE_SIZE = 50

# =============================================================================
# QUERIES
# =============================================================================

PRODUCTS_QUERY = f"""
query products($first: Int!, $after: String) {{
  products(first: $first, after: $after) {{
    edges {{
      node {{
        id
        title
        handle
        status
        description
        productType
        vendor
        tags
        createdAt
        updatedAt
        media(first: {MEDIA_PAGE_SIZE}) {{
          edges {{
            node {{
              id
              mediaContentType
              ... on MediaImage {{
                id
                image {{
                  id
                  url
                  altText
                }}
              }}
              ... on Video {{
                id
                sources {{
                  url
                  mimeType
                  format
                }}
              }}
              ... on ExternalVideo {{
                id
                embedUrl
                host
              }}
            }}
          }}
          pageInfo {{
            hasNextPage
          }}
        }}
        variants(first: {VARIANT_PAGE_SIZE}) {{
          edges {{
            node {{
              id
              title
              sku
              price
              compareAtPrice
              inventoryQuantity
              inventoryItem {{
                id
                tracked
                inventoryLevels(first: {INVENTORY_LEVEL_PAGE_SIZE}) {{
                  edges {{
                    node {{
                      id
                      quantities(names: ["available"]) {{
                        name
                        quantity
                      }}
                      location {{
                        id
                        name
                      }}
                    }}
                  }}
                  pageInfo {{
                    hasNextPage
                  }}
                }}
              }}
              selectedOptions {{
                name
                value
              }}
            }}
          }}
          pageInfo {{
            hasNextPage
          }}
        }}
        options {{
          id
          name
          values
        }}
        metafields(first: {METAFIELD_PAGE_SIZE}) {{
          edges {{
            node {{
              id
              namespace
              key
              value
              type
            }}
          }}
          pageInfo {{
            hasNextPage
          }}
        }}
      }}
    }}
    pageInfo {{
      hasNextPage
      hasPreviousPage
      startCursor
      endCursor
    }}
  }}
}}
"""

# =============================================================================
# MUTATIONS
# =============================================================================

STAGED_UPLOADS_CREATE = """
mutation stagedUploadsCreate($input: [StagedUploadInput!]!) {
  stagedUploadsCreate(input: $input) {
    stagedTargets {
      url
      resourceUrl
      parameters {
        name
        value
      }
    }
    userErrors {
      field
      message
    }
  }
}
"""

PRODUCT_SET = """
mutation createProduct($productSet: ProductSetInput!) {
  productSet(input: $productSet) {
    product {
      id
      title
      handle
      variants(first: 1) {
        nodes {
          id
          sku
          price
        }
      }
    }
    userErrors {
      field
      message
    }
  }
}
"""

PUBLISHABLE_PUBLISH = """
mutation publishProduct($id: ID!, $input: [PublicationInput!]!) {
  publishablePublish(id: $id, input: $input) {
    publishable {
      availablePublicationsCount {
        count
      }
    }
    userErrors {
      field
      message
    }
  }
}
"""

PRODUCT_CREATE_MEDIA = """
mutation productCreateMedia($productId: ID!, $media: [CreateMediaInput!]!) {
  productCreateMedia(productId: $productId, media: $media) {
    media {
      id
      alt
      mediaContentType
      status
      ... on ExternalVideo {
        embedUrl
        host
      }
    }
    mediaUserErrors {
      field
      message
    }
  }
}
"""
