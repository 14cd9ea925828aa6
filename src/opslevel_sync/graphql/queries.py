"""GraphQL documents sent to OpsLevel.

Field selections mirror what the rubric views and the sync workflow read.
"""

from __future__ import annotations

# Read operations carry this header; mutations do not.
VISIBILITY_HEADERS: dict[str, str] = {"GraphQL-Visibility": "internal"}

FRAMEWORK_ANNOTATION = "opslevel.com/framework"

SERVICE_MATURITY_QUERY = """
query getServiceMaturityForBackstage($alias: String!) {
  account {
    rubric {
      levels {
        nodes {
          index
          name
          description
        }
      }
    }
    service(alias: $alias) {
      htmlUrl
      maturityReport {
        overallLevel {
          index
          name
          description
        }
        categoryBreakdown {
          category {
            name
          }
          level {
            name
          }
        }
      }
      serviceStats {
        rubric {
          checkResults {
            byLevel {
              nodes {
                level {
                  index
                  name
                }
                items {
                  nodes {
                    message
                    warnMessage
                    createdAt
                    check {
                      id
                      enableOn
                      name
                      type
                      category {
                        name
                      }
                    }
                    status
                  }
                }
              }
            }
          }
        }
      }
      checkStats {
        totalChecks
        totalPassingChecks
      }
    }
  }
}
"""

SERVICES_REPORT_QUERY = """
query servicesReport {
  account {
    rubric {
      levels {
        totalCount
        nodes {
          index
          name
          alias
        }
      }
      categories {
        nodes {
          id
          name
        }
      }
    }
    servicesReport {
      levelCounts {
        level {
          name
        }
        serviceCount
      }
      categoryLevelCounts {
        category {
          name
        }
        level {
          name
          index
        }
        serviceCount
      }
    }
  }
}
"""

IMPORT_ENTITY_MUTATION = """
mutation import($entityRef: String!, $entity: JSON!) {
  import: importEntityFromBackstage(entityRef: $entityRef, entity: $entity) {
    errors {
      message
    }
    actionMessage
    htmlUrl
  }
}
"""

SERVICE_LANGUAGE_QUERY = """
query getServiceLanguage($alias: String!) {
  account {
    service(alias: $alias) {
      name
      repos {
        edges {
          node {
            languages {
              name
              usage
            }
          }
        }
      }
    }
  }
}
"""

SERVICE_UPDATE_MUTATION = """
mutation serviceUpdate($alias: String!, $language: String, $framework: String) {
  serviceUpdate(input: {alias: $alias, language: $language, framework: $framework}) {
    errors {
      message
    }
  }
}
"""
