"""
openapi-loader 后端主包。

本项目采用分层架构：
- domain：抽象接口、领域模型与应用事件
- infrastructure：外部依赖适配（httpx 拉取、内存接口目录、APScheduler 调度）
- services：业务编排（文档加载、启动钩子与定时任务装配）
- api：FastAPI 接口层
- core：配置、日志等通用能力
"""
