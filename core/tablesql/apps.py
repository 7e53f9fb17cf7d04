from django.apps import AppConfig

class TablesqlConfig(AppConfig):
  name = "tablesql"
  label = "tablesql"
  verbose_name = "Table SQL rendering"
